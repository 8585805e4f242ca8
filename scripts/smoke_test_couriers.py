#!/usr/bin/env python3
"""
Smoke test against a running Courier Gateway API backed by the real MySQL database
Run from the project root: python scripts/smoke_test_couriers.py [base_url]

Walks one order through create -> list -> status -> update -> logs -> delete
and then hits every report.
"""

import asyncio
import sys
import uuid

import httpx

BASE_URL = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:5000/api"


class CourierSmokeTester:
    def __init__(self):
        self.client = httpx.AsyncClient(base_url=BASE_URL)
        self.courier_id = None
        self.bill_number = f"SMOKE-{uuid.uuid4().hex[:8].upper()}"

    async def pick_customer_and_admin(self):
        users = (await self.client.get("/couriers/data/users")).json()["data"]
        admins = (await self.client.get("/couriers/data/admins")).json()["data"]
        if not users or not admins:
            print("❌ Need at least one user and one admin in the database")
            return None
        return users[0], admins[0]

    async def test_create(self, customer, admin):
        print("\n📋 Test: AddCourierOrder")
        response = await self.client.post("/couriers/add", json={
            "customer_id": customer["user_id"],
            "admin_id": admin["admin_id"],
            "bill_number": self.bill_number,
            "pickup_address": "Smoke pickup",
            "delivery_address": "Smoke delivery"
        })
        print(f"   {response.status_code} {response.json().get('message')}")
        if response.status_code != 201:
            return False

        couriers = (await self.client.get("/couriers")).json()["data"]
        matches = [c for c in couriers if c["bill_number"] == self.bill_number]
        if len(matches) != 1:
            print(f"❌ Expected one listed courier for {self.bill_number}, got {len(matches)}")
            return False

        self.courier_id = matches[0]["courier_id"]
        print(f"✅ Courier #{self.courier_id} created")
        return True

    async def test_status_update(self, admin):
        print("\n🔄 Test: UpdateCourierStatus + trigger logs")
        response = await self.client.put(
            f"/couriers/update-status/{self.courier_id}",
            json={"new_status": "In Transit", "changed_by_admin_email": admin["email"]}
        )
        print(f"   {response.status_code} {response.json().get('message')}")
        if response.status_code != 200:
            return False

        status = (await self.client.get(f"/couriers/status/{self.courier_id}")).json()
        logs = (await self.client.get(f"/couriers/{self.courier_id}/logs")).json()
        print(f"   status={status.get('status')} history={len(logs['delivery_history'])} audit={len(logs['audit_logs'])}")
        return status.get("status") == "In Transit" and len(logs["delivery_history"]) > 0

    async def test_reports(self):
        print("\n📊 Test: reports")
        ok = True
        for report in ["join", "nested", "aggregate", "admin-performance", "customer-activity"]:
            response = await self.client.get(f"/reports/{report}")
            body = response.json()
            print(f"   {report}: {response.status_code} ({len(body.get('data', []))} rows)")
            ok = ok and response.status_code == 200
        return ok

    async def test_delete(self):
        print("\n🗑️  Test: delete")
        response = await self.client.delete(f"/couriers/{self.courier_id}")
        print(f"   {response.status_code} {response.json().get('message')}")
        gone = await self.client.get(f"/couriers/status/{self.courier_id}")
        return response.status_code == 200 and gone.status_code == 404

    async def run(self):
        try:
            picked = await self.pick_customer_and_admin()
            if picked is None:
                return False
            customer, admin = picked

            results = {"create": await self.test_create(customer, admin)}
            if results["create"]:
                results["status_update"] = await self.test_status_update(admin)
                results["reports"] = await self.test_reports()
                results["delete"] = await self.test_delete()

            print("\n" + "=" * 40)
            for name, passed in results.items():
                print(f"{'✅' if passed else '❌'} {name}")
            return all(results.values())
        finally:
            await self.client.aclose()


if __name__ == "__main__":
    passed = asyncio.run(CourierSmokeTester().run())
    sys.exit(0 if passed else 1)

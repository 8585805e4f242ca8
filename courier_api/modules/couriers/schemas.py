# courier_api/modules/couriers/schemas.py
from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from courier_api.shared.schemas.common import BaseResponse, ListResponse

# Fields are optional here so that presence is checked by the service and
# reported with the shared 400 envelope instead of FastAPI's 422.

class CourierCreateRequest(BaseModel):
    customer_id: Optional[int] = Field(None, description="Customer (Users.user_id)")
    admin_id: Optional[int] = Field(None, description="Managing admin (Admins.admin_id)")
    bill_number: Optional[str] = Field(None, description="Unique bill number")
    pickup_address: Optional[str] = Field(None, description="Pickup address")
    delivery_address: Optional[str] = Field(None, description="Delivery address")

class CourierStatusUpdateRequest(BaseModel):
    new_status: Optional[str] = Field(None, description="Target status, e.g. 'In Transit'")
    changed_by_admin_email: Optional[str] = Field(None, description="Email of the acting admin")

class CourierCreateResponse(BaseResponse):
    data: List[Dict[str, Any]]

class CourierStatusUpdateResponse(BaseResponse):
    courier_id: int
    new_status: str

class CourierStatusResponse(BaseResponse):
    courier_id: int
    status: str

class CourierLogsResponse(BaseResponse):
    courier_id: int
    delivery_history: List[Dict[str, Any]]
    audit_logs: List[Dict[str, Any]]
    trigger_info: str

class CourierListResponse(ListResponse):
    pass

class DeletedCourier(BaseModel):
    courier_id: int
    bill_number: str

class CourierDeleteResponse(BaseResponse):
    deleted_courier: DeletedCourier

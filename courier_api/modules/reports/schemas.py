# courier_api/modules/reports/schemas.py
from courier_api.shared.schemas.common import ListResponse

class ReportResponse(ListResponse):
    query_type: str
    description: str

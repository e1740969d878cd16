from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class BookingCreateRequest(BaseModel):
    user_id: int = Field(gt=0)
    screening_id: int = Field(gt=0)
    seat_ids: List[int]

    class Config:
        json_schema_extra = {'example': {'user_id': 1, 'screening_id': 1, 'seat_ids': [1, 2]}}


class BookingResponse(BaseModel):
    model_config = {
        'json_schema_extra': {
            'example': {
                'id': 12,
                'user_id': 1,
                'screening_id': 1,
                'status': 'pending',
                'seat_ids': [1, 2],
                'expired_at': '2025-01-10T10:40:00Z',
                'created_at': '2025-01-10T10:30:00Z',
            }
        },
    }

    id: int
    user_id: int
    screening_id: int
    status: str
    seat_ids: List[int]
    expired_at: datetime
    created_at: Optional[datetime] = None


class BookingDetailResponse(BaseModel):
    id: int
    user_id: int
    screening_id: int
    movie_title: str
    cinema_name: str
    studio_name: str
    start_time: datetime
    seats: List[str]
    status: str
    effective_status: str  # 'expired' once an unpaid hold has lapsed
    total_price: int
    expired_at: datetime
    created_at: Optional[datetime] = None


class BookingHistoryItemResponse(BaseModel):
    id: int
    movie_title: str
    cinema_name: str
    start_time: datetime
    seats: List[str]
    status: str


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class BookingHistoryResponse(BaseModel):
    items: List[BookingHistoryItemResponse]
    pagination: PaginationResponse

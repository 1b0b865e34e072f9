"""HTTP handlers for the cached hotel read paths."""

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from booking_gateway.dto import HotelDetailResponse, HotelListParams, HotelListResponse
from booking_gateway.services import HotelService


class HotelHandler:
    """HTTP handlers for hotel listing and details.

    Example:
        ```python
        handler = HotelHandler(hotel_service=hotel_service)

        @app.get("/api/hotels/{hotel_id}")
        async def get_hotel(hotel_id: str):
            return await handler.get_hotel(hotel_id)
        ```
    """

    def __init__(self, hotel_service: HotelService) -> None:
        """Initialize the hotel handler.

        Args:
            hotel_service: The hotel read service (required).
        """
        self._hotels = hotel_service

    async def list_hotels(self, params: HotelListParams) -> HotelListResponse:
        """Handle GET /api/hotels requests.

        Raises:
            HTTPException: 400 if the location cannot be parsed
        """
        try:
            result = await self._hotels.list_hotels(
                page=params.page,
                limit=params.limit,
                sort=params.sort,
                fields=params.fields,
                location=params.location,
            )
        except ValueError as e:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

        return HotelListResponse(**result)

    async def get_hotel(self, hotel_id: str) -> HotelDetailResponse | JSONResponse:
        """Handle GET /api/hotels/{hotel_id} requests."""
        hotel = await self._hotels.get_hotel(hotel_id)
        if hotel is None:
            return JSONResponse(
                status_code=status.HTTP_404_NOT_FOUND,
                content={"success": False, "error": "Hotel not found"},
            )

        return HotelDetailResponse(data=hotel)

from .service import BookingRequest, DistanceProvider, FareQuoteService, PricedTrip, QuoteRequest

__all__ = [
    "BookingRequest",
    "DistanceProvider",
    "FareQuoteService",
    "PricedTrip",
    "QuoteRequest",
]

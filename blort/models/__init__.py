from .visit import OrderBy, VisitRecord, VisitResult


__all__ = [
    "OrderBy",
    "VisitRecord",
    "VisitResult",
]

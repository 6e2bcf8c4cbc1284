from .query_params import IQueryParams

__all__ = ["IQueryParams"]

from __future__ import annotations

from rest_framework.pagination import PageNumberPagination


class DefaultPagination(PageNumberPagination):
    """Page-number pagination for every list endpoint.

    Clients may ask for `?page_size=N`; anything above 100 is capped.
    """

    page_size = 20
    page_size_query_param = "page_size"
    max_page_size = 100

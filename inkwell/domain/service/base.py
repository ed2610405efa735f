"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the business rules that span entities and
    receive their repositories through the constructor.
    """

    pass

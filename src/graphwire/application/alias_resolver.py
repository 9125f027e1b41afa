from graphwire.domain import AliasTable


class AliasResolver:
    """Substitutes abstract type identifiers with their configured concrete type.

    Applied to every identifier before it is described, listed or looked up
    in the registry, including identifiers discovered while expanding
    dependency lists.

    Attributes:
        _table: The immutable alias table.
    """

    def __init__(self, table: AliasTable) -> None:
        self._table = table

    @property
    def table(self) -> AliasTable:
        return self._table

    def resolve(self, identifier: str) -> str:
        """Return the concrete identifier for an alias, or the identifier unchanged.

        Example:
            >>> resolver = AliasResolver(AliasTable.from_mapping({"app.IRepo": "app.SqlRepo"}))
            >>> resolver.resolve("app.IRepo")
            'app.SqlRepo'
        """
        concrete = self._table.lookup(identifier)
        return identifier if concrete is None else concrete

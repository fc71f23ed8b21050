# engine/exceptions.py

class GraphError(Exception):
    pass


class DuplicateIdentity(GraphError):
    def __init__(self, name: str, first_directory: str = "", second_directory: str = "") -> None:
        self.name = name
        self.first_directory = first_directory
        self.second_directory = second_directory
        detail = f"duplicate workspace package name {name!r}"
        if first_directory or second_directory:
            detail += f" (declared in {first_directory or '?'} and {second_directory or '?'})"
        super().__init__(detail)


class PackageNotFound(GraphError, KeyError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"package {name!r} is not part of the workspace graph")

    def __str__(self) -> str:
        return str(self.args[0])


class MalformedRecord(GraphError):
    def __init__(self, reason: str, raw: object = None) -> None:
        self.reason = reason
        self.raw = raw
        super().__init__(reason)

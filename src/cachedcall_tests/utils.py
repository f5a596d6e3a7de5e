from typing import Optional

__all__ = [
    "Counter",
    "Document",
    "Pair",
    "Person",
    "Tagged",
    "Unidentified",
    "Weird",
]


class Counter:
    """A computation that remembers how many times it was called."""

    def __init__(self, result=None, fail: bool = False):
        self.calls = []
        self.result = result
        self.fail = fail

    def __call__(self, *args):
        self.calls.append(args)
        if self.fail:
            raise ValueError(f"failing on {args}")
        if callable(self.result):
            return self.result(*args)
        return self.result

    @property
    def count(self) -> int:
        return len(self.calls)


class Person:
    def __init__(self, id: Optional[int]):
        self.id = id


class Document:
    def __init__(self, ID: int):
        self.ID = ID


class Pair:
    def __init__(self, Id: str, id: Optional[int] = None):
        self.Id = Id
        if id is not None:
            self.id = id


class Weird:
    def __init__(self, iD: int):
        self.iD = iD


class Tagged:
    def __init__(self, tag: str, id: int = 0):
        self.tag = tag
        self.id = id

    def cache_identifier(self) -> str:
        return self.tag


class Unidentified:
    def __init__(self):
        self.name = "nobody"

from __future__ import annotations


class Book:
    """Represents a single book record in the store.

    Fields are plain attributes: reading returns the last value written and
    writing always overwrites. Nothing is validated, so ``None`` strings and
    negative prices are accepted as-is.
    """

    def __init__(self, id: int = 0, title: str | None = None, author: str | None = None,
                 price: float = 0.0) -> None:
        self.id = id
        self.title = title
        self.author = author
        self.price = price

    @classmethod
    def with_id(cls, id: int) -> "Book":
        return cls(id=id)

    @classmethod
    def create(cls, id: int, title: str | None, author: str | None, price: float) -> "Book":
        return cls(id=id, title=title, author=author, price=price)

    @classmethod
    def without_id(cls, title: str | None, author: str | None, price: float) -> "Book":
        """Build a book whose id is assigned later (e.g. by whoever stores it)."""
        return cls(title=title, author=author, price=price)

    def __str__(self) -> str:  # pragma: no cover - string formatting trivial
        return f"{self.title} by {self.author} (#{self.id})"

    def to_dict(self) -> dict:
        return {"id": self.id, "title": self.title, "author": self.author, "price": self.price}

    @staticmethod
    def from_dict(data: dict) -> "Book":
        return Book(
            id=data.get("id", 0),
            title=data.get("title"),
            author=data.get("author"),
            price=data.get("price", 0.0),
        )

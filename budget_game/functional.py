from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, TypeVar

T = TypeVar('T')
U = TypeVar('U')
E = TypeVar('E')

# Error codes carried in the "error" key of a Left payload
SHOPPING_REQUIRED = "shopping_required"
ALREADY_COMPLETE = "already_complete"
INSUFFICIENT_FUNDS = "insufficient_funds"
EMPTY_CART = "empty_cart"
UNKNOWN_ITEM = "unknown_item"
INVALID_QUANTITY = "invalid_quantity"
UNKNOWN_CATEGORY = "unknown_category"
INVALID_AMOUNT = "invalid_amount"


class Either(Generic[E, T], ABC):
    """Outcome of a game operation: Right(value) on success, Left(error) otherwise."""

    @abstractmethod
    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        pass

    @abstractmethod
    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        pass

    @abstractmethod
    def get_or_else(self, default: T) -> T:
        pass

    @abstractmethod
    def is_right(self) -> bool:
        pass

    def is_left(self) -> bool:
        return not self.is_right()

    @abstractmethod
    def get(self) -> T:
        pass

    @abstractmethod
    def get_error(self) -> E:
        pass


class Right(Either[E, T]):

    def __init__(self, value: T):
        self._value = value

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Right(f(self._value))

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return f(self._value)

    def get_or_else(self, default: T) -> T:
        return self._value

    def is_right(self) -> bool:
        return True

    def get(self) -> T:
        return self._value

    def get_error(self) -> E:
        raise ValueError("Cannot get error from Right")

    def __repr__(self) -> str:
        return f"Right({self._value!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Right) and self._value == other._value


class Left(Either[E, T]):

    def __init__(self, error: E):
        self._error = error

    def map(self, f: Callable[[T], U]) -> 'Either[E, U]':
        return Left(self._error)

    def bind(self, f: Callable[[T], 'Either[E, U]']) -> 'Either[E, U]':
        return Left(self._error)

    def get_or_else(self, default: T) -> T:
        return default

    def is_right(self) -> bool:
        return False

    def get(self) -> T:
        raise ValueError(f"Cannot get value from Left: {self._error!r}")

    def get_error(self) -> E:
        return self._error

    def __repr__(self) -> str:
        return f"Left({self._error!r})"

    def __eq__(self, other) -> bool:
        return isinstance(other, Left) and self._error == other._error


def failure(code: str, message: str, **details: Any) -> Left:
    """Build the Left payload shared by every rejected game operation."""
    return Left({"error": code, "message": message, **details})


def error_code(result: Either) -> str:
    return result.get_error()["error"] if result.is_left() else ""

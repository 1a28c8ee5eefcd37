"""
Validation building blocks for the wayfinding package.

Two consumers drive what lives here:

- The graph checks node ids and coordinate pairs at its mutation boundary with
  short lists of rules evaluated by ``first_failure``.
- The path and statistics value objects are frozen dataclasses decorated with
  ``validate_dataclass``, which checks every field against its type hint after
  construction.

``ValidationResult`` is the report format shared with the GeoJSON schema
validator.
"""

from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Dict,
    List,
    Optional,
    Tuple,
    Type,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)


@dataclass
class ValidationResult:
    """
    Outcome of validating one document or feature.

    Attributes:
        is_valid (bool): True when no errors were found
        errors (List[str]): Reasons the value was rejected
        warnings (List[str]): Problems that did not reject the value
        context (Optional[Dict[str, Any]]): What was validated, for log messages
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    context: Optional[Dict[str, Any]] = None

    @classmethod
    def from_messages(
        cls,
        errors: List[str],
        warnings: Optional[List[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> "ValidationResult":
        """Build a result whose validity follows from the error list."""
        return cls(
            is_valid=not errors,
            errors=list(errors),
            warnings=list(warnings or []),
            context=context,
        )


class ValidationRule:
    """
    A single named check on a value.

    Attributes:
        error_message (str): Message reported when the check fails
    """

    def __init__(self, error_message: str):
        self.error_message = error_message

    def validate(self, value: Any) -> bool:
        """
        Return True if ``value`` passes the check.

        Raises:
            NotImplementedError: Subclasses must provide the check
        """
        raise NotImplementedError("Validation rules must implement validate()")


class RequiredRule(ValidationRule):
    """Rejects None and blank strings."""

    def validate(self, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip() != ""
        return value is not None


class TypeRule(ValidationRule):
    """
    Accepts instances of the given type or types.

    Attributes:
        expected_type: A type or tuple of types passed to isinstance
    """

    def __init__(self, expected_type: Union[Type, Tuple[Type, ...]], error_message: str):
        super().__init__(error_message)
        self.expected_type = expected_type

    def validate(self, value: Any) -> bool:
        return isinstance(value, self.expected_type)


class CustomRule(ValidationRule):
    """Delegates the check to a predicate."""

    def __init__(self, predicate: Callable[[Any], bool], error_message: str):
        super().__init__(error_message)
        self.predicate = predicate

    def validate(self, value: Any) -> bool:
        return bool(self.predicate(value))


def first_failure(value: Any, rules: List[ValidationRule]) -> Optional[ValidationRule]:
    """Return the first rule that rejects ``value``, or None if all rules pass.

    Rules are evaluated in order, so later rules may assume earlier ones held
    (e.g. a length check placed after a type check).
    """
    for rule in rules:
        if not rule.validate(value):
            return rule
    return None


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


class DataclassRule(ValidationRule):
    """
    Checks every field of a dataclass instance against its type hint.

    Supported hints are the ones the wayfinding models use: plain classes
    (enums included), ``float`` (ints accepted, bools rejected), ``Optional``,
    ``List[X]``, ``Dict[K, V]``, ``Tuple[X, Y]`` and ``Tuple[X, ...]``.
    Container elements are checked recursively; any other generic only has
    its container type checked.

    Attributes:
        dataclass_type: The dataclass checked
        type_hints: Resolved field hints of dataclass_type
    """

    def __init__(self, dataclass_type: Type, error_message: str = ""):
        super().__init__(error_message or f"Invalid field types in {dataclass_type.__name__}")
        self.dataclass_type = dataclass_type
        self.type_hints = get_type_hints(dataclass_type)

    def invalid_fields(self, value: Any) -> List[str]:
        """Names of the fields of ``value`` that do not match their hints."""
        return [
            name
            for name, hint in self.type_hints.items()
            if not _matches(getattr(value, name), hint)
        ]

    def validate(self, value: Any) -> bool:
        return isinstance(value, self.dataclass_type) and not self.invalid_fields(value)


def _matches(value: Any, hint: Any) -> bool:
    if hint is Any:
        return True

    origin = get_origin(hint)
    args = get_args(hint)

    if origin is Union:
        if value is None:
            return type(None) in args
        return any(_matches(value, arg) for arg in args if arg is not type(None))

    if value is None:
        return False
    if hint is float:
        return _is_real(value)
    if origin is list:
        if not isinstance(value, list):
            return False
        return not args or all(_matches(item, args[0]) for item in value)
    if origin is dict:
        if not isinstance(value, dict):
            return False
        if len(args) != 2:
            return True
        return all(_matches(k, args[0]) and _matches(v, args[1]) for k, v in value.items())
    if origin is tuple:
        return _matches_tuple(value, args)
    try:
        return isinstance(value, origin or hint)
    except TypeError:
        # Hints isinstance cannot handle are accepted unchecked
        return True


def _matches_tuple(value: Any, args: Tuple[Any, ...]) -> bool:
    if not isinstance(value, tuple):
        return False
    if not args:
        return True
    if len(args) == 2 and args[1] is Ellipsis:
        return all(_matches(item, args[0]) for item in value)
    return len(args) == len(value) and all(_matches(v, a) for v, a in zip(value, args))


def validate_dataclass(cls: Type[Any]) -> Type[Any]:
    """
    Class decorator that type-checks dataclass fields after construction.

    The class's own ``__post_init__`` runs first, then every field is checked
    against its hint; a mismatch raises TypeError naming the fields. Apply it
    outside ``@dataclass`` and give the class a ``__post_init__``, since the
    generated ``__init__`` only calls one that exists when the dataclass is
    created.

    Example:
        >>> @validate_dataclass
        ... @dataclass(frozen=True)
        ... class Endpoint:
        ...     node_id: str
        ...     def __post_init__(self):
        ...         pass
    """
    own_post_init = getattr(cls, "__post_init__", None)
    rule: List[DataclassRule] = []

    def checked_post_init(self):
        if own_post_init:
            own_post_init(self)

        # Hints are resolved on first use so that forward references can settle
        if not rule:
            rule.append(DataclassRule(cls))
        invalid = rule[0].invalid_fields(self)
        if invalid:
            raise TypeError(f"{rule[0].error_message}: {', '.join(invalid)}")

    cls.__post_init__ = checked_post_init
    return cls

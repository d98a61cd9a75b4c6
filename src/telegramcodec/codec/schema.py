"""Schema introspection for telegram models.

This module turns a Pydantic model into a layout table: one FieldSchema per
described field, in declaration order, with compiled accessors and a factory
for empty instances. Layout references are validated once, when the schema is
built, and the embedded/list type graph is checked for cycles.
"""

from __future__ import annotations

import enum
import logging
import operator
import types
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional, Type, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from ..exceptions import ConversionError, ErrorKind, SchemaError
from ..models.fields import DATA, EMBEDDED, ITERATION, LAYOUT_KEY, REMAINDER

logger = logging.getLogger(__name__)


class FieldKind(enum.Enum):
    """Layout kind of a described field."""

    DATA = DATA
    EMBEDDED = EMBEDDED
    ITERATION = ITERATION


def resolve_size(instance: Any, literal: int, field_name: Optional[str]) -> int:
    """Resolve a width or repeat count.

    A positive literal is returned as-is. Otherwise the value of the sibling
    field ``field_name`` is read from ``instance``; it must already hold a
    non-negative integer.

    Args:
        instance: Telegram being decoded or encoded
        literal: Configured literal width/count (0 when referenced)
        field_name: Referenced sibling field

    Returns:
        Resolved size

    Raises:
        ConversionError: If the referenced field is missing or not an integer
    """
    if literal > 0:
        return literal

    try:
        value = getattr(instance, field_name)  # type: ignore[arg-type]
    except (AttributeError, TypeError) as err:
        raise ConversionError(
            f"cannot read size field {field_name!r} of {type(instance).__name__}",
            kind=ErrorKind.FIELD_ACCESS_FAILED,
            cause=err,
        ) from err

    if isinstance(value, bool) or not isinstance(value, int):
        raise ConversionError(
            f"size field {field_name!r} of {type(instance).__name__} must hold an integer, "
            f"got {value!r}",
            kind=ErrorKind.FIELD_ACCESS_FAILED,
        )
    if value < 0:
        raise ConversionError(
            f"size field {field_name!r} of {type(instance).__name__} is negative ({value})",
            kind=ErrorKind.FIELD_ACCESS_FAILED,
        )
    return value


@dataclass(frozen=True)
class FieldSchema:
    """Layout information for a single described field.

    Attributes:
        name: Field name
        kind: Layout kind
        python_type: Value type (element type for ITERATION fields)
        length: Literal width, 0 if referenced, REMAINDER for the stream rest
        length_field: Sibling field holding the width
        count: Literal repeat count, 0 if referenced
        count_field: Sibling field holding the count
        format: Date/time pattern
        ignorable: Emit nothing on encode when the value is None
    """

    name: str
    kind: FieldKind
    python_type: Type[Any]
    length: int = 0
    length_field: Optional[str] = None
    count: int = 0
    count_field: Optional[str] = None
    format: Optional[str] = None
    ignorable: bool = False
    getter: Callable[[Any], Any] = field(default=None, repr=False, compare=False)  # type: ignore[assignment]
    setter: Callable[[Any, Any], None] = field(default=None, repr=False, compare=False)  # type: ignore[assignment]

    @property
    def is_list(self) -> bool:
        return self.kind is FieldKind.ITERATION

    def get(self, instance: Any) -> Any:
        try:
            return self.getter(instance)
        except AttributeError as err:
            raise ConversionError(
                f"cannot read field {self.name!r} of {type(instance).__name__}",
                kind=ErrorKind.FIELD_ACCESS_FAILED,
                cause=err,
            ) from err

    def set(self, instance: Any, value: Any) -> None:
        try:
            self.setter(instance, value)
        except (AttributeError, TypeError, ValueError) as err:
            raise ConversionError(
                f"cannot assign field {self.name!r} of {type(instance).__name__}",
                kind=ErrorKind.FIELD_ACCESS_FAILED,
                cause=err,
            ) from err

    def resolve_width(self, instance: Any) -> int:
        """Width in bytes for this field on ``instance`` (REMAINDER passes through)."""
        if self.length == REMAINDER:
            return REMAINDER
        return resolve_size(instance, self.length, self.length_field)

    def resolve_count(self, instance: Any) -> int:
        """Number of list elements for this field on ``instance``."""
        return resolve_size(instance, self.count, self.count_field)


def _make_setter(name: str) -> Callable[[Any, Any], None]:
    def setter(instance: Any, value: Any) -> None:
        setattr(instance, name, value)

    return setter


def _unwrap_optional(name: str, annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        non_none_args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(non_none_args) != 1:
            raise SchemaError(f"Field {name}: complex Union types not supported")
        return non_none_args[0]
    return annotation


def _is_model(candidate: Any) -> bool:
    return isinstance(candidate, type) and issubclass(candidate, BaseModel)


# Layout tables by model class. Only complete, acyclic schemas are stored.
_REGISTRY: dict[type, TelegramSchema] = {}


class TelegramSchema:
    """Layout table for an entire telegram.

    Example:
        >>> schema = TelegramSchema.for_model(Order)
        >>> [(f.name, f.kind.value) for f in schema.fields]
        [('line_count', 'data'), ('lines', 'iteration')]
    """

    def __init__(self, model_class: Type[BaseModel]) -> None:
        """Build the layout table of a Pydantic model.

        Nested types are not visited here; use for_model() to get a schema
        whose whole type graph has been validated.

        Args:
            model_class: Pydantic model class to introspect

        Raises:
            SchemaError: If the model or one of its layouts is invalid
        """
        if not _is_model(model_class):
            raise SchemaError(f"{model_class!r} is not a Pydantic model")

        self.model_class = model_class
        self.fields: List[FieldSchema] = []
        self._ensure_complete()
        self._introspect()

    @classmethod
    def for_model(cls, model_class: Type[BaseModel]) -> TelegramSchema:
        """Return the validated schema of ``model_class``, building it on first use.

        Raises:
            SchemaError: If any layout in the type graph is invalid or the
                embedded/list types form a cycle
        """
        schema = _REGISTRY.get(model_class)
        if schema is None:
            schema = cls._register(model_class, ())
        return schema

    @classmethod
    def _register(cls, model_class: Type[BaseModel], path: tuple[type, ...]) -> TelegramSchema:
        if model_class in path:
            cycle = " -> ".join(t.__name__ for t in (*path, model_class))
            raise SchemaError(f"Cyclic telegram layout: {cycle}")

        schema = _REGISTRY.get(model_class)
        if schema is not None:
            return schema

        schema = cls(model_class)
        for field_schema in schema.fields:
            if field_schema.kind is not FieldKind.DATA:
                cls._register(field_schema.python_type, (*path, model_class))

        _REGISTRY[model_class] = schema
        logger.debug(
            "registered telegram layout %s (%d fields)", model_class.__name__, len(schema.fields)
        )
        return schema

    def create(self) -> Any:
        """Create an empty instance with every field at its default.

        Raises:
            ConversionError: If the model cannot be constructed
        """
        try:
            return self.model_class.model_construct()
        except Exception as err:
            raise ConversionError(
                f"cannot construct {self.model_class.__name__}: {err}",
                kind=ErrorKind.CONSTRUCTION_FAILED,
                cause=err,
            ) from err

    def _ensure_complete(self) -> None:
        if getattr(self.model_class, "__pydantic_complete__", True):
            return
        try:
            self.model_class.model_rebuild()
        except Exception as err:
            raise SchemaError(
                f"cannot resolve annotations of {self.model_class.__name__}: {err}", cause=err
            ) from err

    def _introspect(self) -> None:
        declared: list[str] = []
        for field_name, field_info in self.model_class.model_fields.items():
            field_schema = self._extract_field_schema(field_name, field_info, declared)
            if field_schema is not None:
                self.fields.append(field_schema)
            declared.append(field_name)

    def _extract_field_schema(
        self, name: str, field_info: FieldInfo, declared: list[str]
    ) -> Optional[FieldSchema]:
        extra = field_info.json_schema_extra
        layout = extra.get(LAYOUT_KEY) if isinstance(extra, dict) else None
        if layout is None:
            return None

        annotation = field_info.annotation
        if annotation is None:
            raise SchemaError(f"Field {name} has no type annotation")
        annotation = _unwrap_optional(name, annotation)

        try:
            kind = FieldKind(layout["kind"])
        except (KeyError, TypeError, ValueError) as err:
            raise SchemaError(f"Field {name}: unknown layout {layout!r}", cause=err) from err

        accessors = {"getter": operator.attrgetter(name), "setter": _make_setter(name)}
        ignorable = bool(layout.get("ignorable", False))

        if kind is FieldKind.ITERATION:
            if get_origin(annotation) is not list or not get_args(annotation):
                raise SchemaError(f"Field {name}: iteration fields must be annotated list[...]")
            element_type = get_args(annotation)[0]
            if not _is_model(element_type):
                raise SchemaError(
                    f"Field {name}: list element {element_type!r} is not a Pydantic model"
                )
            count = int(layout.get("count", 0))
            count_field = layout.get("count_field")
            self._check_size(name, count, count_field, declared, "count")
            return FieldSchema(
                name=name,
                kind=kind,
                python_type=element_type,
                count=count,
                count_field=count_field,
                ignorable=ignorable,
                **accessors,
            )

        if kind is FieldKind.EMBEDDED:
            if not _is_model(annotation):
                raise SchemaError(f"Field {name}: embedded type {annotation!r} is not a Pydantic model")
            return FieldSchema(
                name=name, kind=kind, python_type=annotation, ignorable=ignorable, **accessors
            )

        length = int(layout.get("length", 0))
        length_field = layout.get("length_field")
        if length < REMAINDER:
            raise SchemaError(f"Field {name}: length must be >= {REMAINDER}, got {length}")
        if length != REMAINDER:
            self._check_size(name, length, length_field, declared, "length")
        return FieldSchema(
            name=name,
            kind=kind,
            python_type=annotation,
            length=length,
            length_field=length_field,
            format=layout.get("format"),
            ignorable=ignorable,
            **accessors,
        )

    def _check_size(
        self, name: str, literal: int, reference: Optional[str], declared: list[str], what: str
    ) -> None:
        if literal < 0:
            raise SchemaError(f"Field {name}: {what} must be >= 0, got {literal}")
        if literal > 0:
            return
        if not reference:
            raise SchemaError(f"Field {name}: {what} 0 requires a {what}_field")
        if reference == name or reference not in declared:
            where = "a later field" if reference in self.model_class.model_fields else "unknown"
            raise SchemaError(
                f"Field {name}: {what}_field {reference!r} of {self.model_class.__name__} is "
                f"{where}; it must name a field declared before {name!r}"
            )

    def field(self, name: str) -> FieldSchema:
        """Return the schema of a described field by name.

        Raises:
            KeyError: If no described field has that name
        """
        for field_schema in self.fields:
            if field_schema.name == name:
                return field_schema
        raise KeyError(name)

"""
Spec template models for sketchlogic.

A spec is the display template of a block, e.g. ``"set %m.varInt to %d"``.
Tokens are separated by single spaces; a token starting with ``%`` is a typed
field placeholder (``%<type>[.<name>]``), anything else is literal text.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple, Union
from pydantic import BaseModel, Field

from ..errors import SpecArityError, SpecParseError

if TYPE_CHECKING:
    from .block import Block


class SpecFieldType(str, Enum):
    """Types of a spec field, valued by their type character."""

    STRING = "s"
    BOOLEAN = "b"
    NUMBER = "d"

    # Holds a component/view/variable picked by the user from a menu
    MENU = "m"


class TextItem(BaseModel):
    """Literal text in a spec."""

    text: str = Field(..., description="The literal token")

    def __str__(self) -> str:
        return self.text


class FieldItem(BaseModel):
    """
    A field (argument placeholder) in a spec.

    Examples:
        ``%s`` is a string field with no name, ``%m.view`` is a menu field named ``view``.
    """

    field_type: SpecFieldType = Field(..., description="The type of value this field accepts")
    name: Optional[str] = Field(
        default=None,
        description="The text after the first '.', None when the token has no '.'"
    )

    @classmethod
    def parse(cls, token: str, spec: str = "") -> "FieldItem":
        type_char, dot, name = token[1:].partition(".")
        try:
            field_type = SpecFieldType(type_char)
        except ValueError:
            raise SpecParseError(token, spec or token) from None
        return cls(field_type=field_type, name=name if dot else None)

    def __str__(self) -> str:
        if self.name is None:
            return f"%{self.field_type.value}"
        return f"%{self.field_type.value}.{self.name}"


SpecItem = Union[FieldItem, TextItem]


class Spec(BaseModel):
    """
    A parsed spec: an ordered sequence of text and field items.
    """

    items: List[SpecItem] = Field(default_factory=list, description="Items in display order")

    @classmethod
    def parse(cls, text: str) -> "Spec":
        """
        Parse spec text into items.

        Args:
            text: The raw spec, e.g. ``"if %b then"``

        Returns:
            The parsed Spec

        Raises:
            SpecParseError: If a field token has an unknown type character
        """
        items: List[SpecItem] = []
        for token in text.split(" "):
            if token.startswith("%"):
                items.append(FieldItem.parse(token, text))
            else:
                items.append(TextItem(text=token))
        return cls(items=items)

    def reconstruct(self) -> str:
        """Rebuild the spec text; the exact inverse of ``parse``."""
        return " ".join(str(item) for item in self.items)

    def __str__(self) -> str:
        return self.reconstruct()

    def get_all_fields(self) -> List[FieldItem]:
        """Retrieve all fields of this spec, left to right."""
        return [item for item in self.items if isinstance(item, FieldItem)]

    def get_field(self, index: int) -> Optional[FieldItem]:
        """Retrieve the field at ``index`` among the fields, or None."""
        fields = self.get_all_fields()
        if 0 <= index < len(fields):
            return fields[index]
        return None

    @property
    def field_count(self) -> int:
        return len(self.get_all_fields())

    def bind(self, arguments: Sequence[Union[str, "Block"]]) -> "BoundSpec":
        """
        Bind positional arguments to the fields of this spec.

        Raises:
            SpecArityError: If the number of arguments differs from the number of fields
        """
        expected = self.field_count
        if len(arguments) != expected:
            raise SpecArityError(expected, len(arguments), self.reconstruct())
        return BoundSpec(spec=self, arguments=list(arguments))


class BoundSpec(BaseModel):
    """
    A spec together with one argument per field.

    An argument is either a plain string or a reporter Block that was referenced
    as ``@<id>`` in the block's parameters.
    """

    spec: Spec = Field(..., description="The parsed template")
    arguments: List[Union[str, "Block"]] = Field(
        default_factory=list,
        description="Arguments in field order"
    )

    def bindings(self) -> List[Tuple[FieldItem, Union[str, "Block"]]]:
        """Pair every field with its argument, in field order."""
        return list(zip(self.spec.get_all_fields(), self.arguments))

    def named_arguments(self) -> Dict[str, Any]:
        """Map field names to arguments; unnamed fields are skipped."""
        return {
            field.name: argument
            for field, argument in self.bindings()
            if field.name is not None
        }

    def argument_blocks(self) -> List["Block"]:
        return [argument for argument in self.arguments if not isinstance(argument, str)]

    def __str__(self) -> str:
        return self.spec.reconstruct()

"""
dataModel.py

This module defines the data models used throughout dollarbrace.

Features:
- The immutable `Token` produced by the tokenizer.
- Pydantic models describing command line requests and scan results.

Usage:
Import these models to structure data passed between the tokenizer, the
filters and the command line front end.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from pydantic import BaseModel, Field


@dataclass(frozen=True)
class Token:
    """A span of tokenized text.

    Attributes:
        value: Literal text, or the unexpanded body of a placeholder
        is_property: True when the token is a `${...}` placeholder

    Example:
        * "${a_${b}}" tokenizes to Token(value="a_${b}", is_property=True)
    """

    value: str
    is_property: bool = False

    def source(self) -> str:
        """Text of the token as it appeared in the input."""
        if self.is_property:
            return "${" + self.value + "}"
        return self.value


class FilterRequest(BaseModel):
    """
    Resolver configuration collected from command line options.

    Attributes:
        defines (dict[str, str]): Properties given with -D key=value.
        property_files (list[Path]): JSON property files, in priority order.
        use_defaults (bool): Whether to consult the per-user defaults file.
        use_env (bool): Enable the env. resolver.
        use_system (bool): Enable the runtime property resolver.
        use_expr (bool): Enable the expression resolver.
    """

    defines: dict[str, str] = Field(
        default_factory=dict, description="Properties given on the command line."
    )
    property_files: list[Path] = Field(
        default_factory=list, description="JSON property files, first wins."
    )
    use_defaults: bool = Field(
        default=True, description="Consult the per-user defaults file."
    )
    use_env: bool = Field(default=False, description="Resolve env.NAME properties.")
    use_system: bool = Field(default=False, description="Resolve runtime properties.")
    use_expr: bool = Field(default=False, description="Evaluate expressions.")


class ScanResult(BaseModel):
    """
    Placeholders discovered in a piece of text.

    Attributes:
        placeholders (list[str]): Placeholder bodies in input order.
        dangling (Optional[str]): Trailing text starting at an unclosed opener.
    """

    placeholders: list[str] = Field(default_factory=list)
    dangling: Optional[str] = Field(
        default=None, description="Unclosed '${' text left as literal."
    )

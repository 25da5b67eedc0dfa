"""Click parameter types for UGSMETA's wire enums."""

from __future__ import annotations

from typing import Any

import click

from ugsmeta.domain.errors import UnknownCodeError
from ugsmeta.domain.value_objects import BadgeResult, UserVote


class WireEnumParamType(click.ParamType):
    """Accept either a wire code (``3``) or a member name (``success``)."""

    def __init__(self, enum_cls: type[BadgeResult] | type[UserVote]) -> None:
        self.enum_cls = enum_cls
        self.name = enum_cls.__name__

    def get_metavar(self, param: click.Parameter, *args: Any, **kwargs: Any) -> str:
        return "[" + "|".join(m.name.lower() for m in self.enum_cls) + "|CODE]"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> BadgeResult | UserVote:
        if isinstance(value, self.enum_cls):
            return value
        text = str(value).strip()
        try:
            if text.lstrip("-").isdigit():
                return self.enum_cls.from_code(int(text))
            return self.enum_cls[text.upper().replace("-", "_")]
        except (KeyError, UnknownCodeError):
            names = ", ".join(m.name.lower() for m in self.enum_cls)
            self.fail(
                f"{value!r} is not a {self.name} name ({names}) or code "
                f"(0-{max(self.enum_cls)})",
                param,
                ctx,
            )


BADGE_RESULT = WireEnumParamType(BadgeResult)
USER_VOTE = WireEnumParamType(UserVote)

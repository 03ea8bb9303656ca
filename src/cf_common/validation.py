"""Field-error formatting shared by the request-validation handler and
multipart form parsing.

Both pydantic.ValidationError and FastAPI's RequestValidationError expose
``errors()`` as a list of dicts with ``loc`` and ``msg``.
"""

from collections.abc import Iterable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from src.cf_common.errors import ValidationFailedError

_M = TypeVar("_M", bound=BaseModel)

# Leading loc segments that only say where FastAPI found the value.
_LOC_SOURCES = {"body", "query", "path", "form", "header", "cookie"}


def field_errors(errors: Iterable[Mapping[str, Any]]) -> list[dict[str, str]]:
    """Flatten pydantic/FastAPI errors into ``[{"field", "message"}]``."""
    out: list[dict[str, str]] = []
    for err in errors:
        loc = [str(part) for part in err.get("loc", ())]
        if loc and loc[0] in _LOC_SOURCES:
            loc = loc[1:]
        out.append({"field": ".".join(loc) or "__root__", "message": str(err.get("msg", ""))})
    return out


def parse_model(model: type[_M], values: Mapping[str, Any]) -> _M:
    """Validate ``values`` into ``model``; raise ValidationFailedError on failure."""
    try:
        return model.model_validate(dict(values))
    except ValidationError as exc:
        raise ValidationFailedError(field_errors(exc.errors())) from None

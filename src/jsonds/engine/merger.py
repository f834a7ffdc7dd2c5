"""Field merger: build the record to emit from decoded fields.

Precedence, lowest to highest:
1. default fields (copied fresh per record)
2. data store parameters (evaluation context only)
3. decoded line fields (evaluation context only)
4. script results (non-None values only)

With an empty script mapping there is nothing to select fields with, so
the pass-through parameters and the decoded fields are emitted over the
defaults. Parameter keys the connector interprets itself (files,
directories, fileEncoding, script_type) stay out of the record.
"""

from collections.abc import Callable, Mapping
from typing import Any

from jsonds.contracts import (
    DEFAULT_SCRIPT_TYPE,
    RECOGNIZED_PARAMS,
    SCRIPT_TYPE_PARAM,
    DataStoreParams,
    EvaluationError,
    JsonValue,
)
from jsonds.plugins.protocols import EvaluatorProtocol


def build_context(
    source: Mapping[str, JsonValue], params: DataStoreParams
) -> dict[str, Any]:
    """Parameters overlaid with decoded fields; decoded fields win."""
    context: dict[str, Any] = params.as_dict()
    context.update(source)
    return context


def evaluate_script(
    data: dict[str, Any],
    context: dict[str, Any],
    script_map: Mapping[str, str],
    evaluator: EvaluatorProtocol,
    script_type: str,
) -> dict[str, Any]:
    """Evaluate each script entry in order and set non-None results on data.

    Raises:
        EvaluationError: On the first expression that fails.
    """
    for field, expression in script_map.items():
        try:
            value = evaluator.evaluate(script_type, expression, context)
        except Exception as e:
            raise EvaluationError(field, expression, str(e)) from e
        if value is not None:
            data[field] = value
    return data


def merge_fields(
    source: Mapping[str, JsonValue],
    params: DataStoreParams,
    script_map: Mapping[str, str],
    default_data: Mapping[str, Any],
    evaluator: EvaluatorProtocol,
    script_type: str,
    on_prepared: Callable[[], None] | None = None,
    data: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build the record for one decoded line.

    Args:
        source: Decoded line fields
        params: Data store parameters
        script_map: Output field -> expression
        default_data: Template of default fields, never mutated
        evaluator: Script evaluator
        script_type: Hint passed to the evaluator
        on_prepared: Called once the evaluation context is built
        data: Record to fill in place, so callers keep the partial field
            state if evaluation fails. A fresh copy of default_data is
            used when omitted.

    Raises:
        EvaluationError: If a script expression fails.
    """
    if data is None:
        data = dict(default_data)
    context = build_context(source, params)
    if on_prepared is not None:
        on_prepared()

    if not script_map:
        data.update(
            (k, v) for k, v in params.as_dict().items() if k not in RECOGNIZED_PARAMS
        )
        data.update(source)
        return data
    return evaluate_script(data, context, script_map, evaluator, script_type)


def record_url(record: Mapping[str, Any]) -> str | None:
    """The record's url field if it is a string."""
    match record.get("url"):
        case str() as url:
            return url
        case _:
            return None


def resolve_script_type(params: DataStoreParams) -> str:
    """Script type hint for the evaluator; defaults to the python evaluator."""
    value = params.get_as_string(SCRIPT_TYPE_PARAM)
    if value is None or not value.strip():
        return DEFAULT_SCRIPT_TYPE
    return value.strip()

"""Call dispatch and the uniform outcome convention."""

from __future__ import annotations

import logging
from collections.abc import Callable

from botocore.exceptions import BotoCoreError, ClientError

from aws_script_bridge.errors import BridgeError, error_text
from aws_script_bridge.script_runtime import Outcome

logger = logging.getLogger(__name__)


def success(value: object) -> Outcome:
    return Outcome(value, None)


def failure(message: str) -> Outcome:
    return Outcome(None, message or "unknown error")


def dispatch(operation: str, handler: Callable[[], object]) -> Outcome:
    """Run ``handler`` and fold any failure into ``Outcome(None, text)``.

    A failure anywhere discards whatever the handler had built so far.
    """
    logger.debug("Dispatching %s", operation)
    try:
        value = handler()
    except BridgeError as exc:
        logger.warning("%s failed at %s stage: %s", operation, exc.stage, exc)
        return failure(error_text(exc))
    except (ClientError, BotoCoreError) as exc:
        logger.warning("%s failed at remote stage: %s", operation, exc)
        return failure(error_text(exc))
    except OSError as exc:
        logger.warning("%s failed at local-io stage: %s", operation, exc)
        return failure(error_text(exc))
    except Exception as exc:
        logger.exception("Unexpected error in %s: %s", operation, exc)
        return failure(error_text(exc))

    if value is None:
        # None is the failure marker; a handler must never produce it on success.
        logger.error("%s produced no value", operation)
        return failure(f"'{operation}' produced no value")
    return success(value)

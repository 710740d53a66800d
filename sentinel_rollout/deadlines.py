"""Progress deadline resolution for managed deployments."""

import logging

from .exceptions import DeadlineResolutionError, RolloutQueryError
from .query import RolloutQuery

logger = logging.getLogger(__name__)


def parse_deadlines(raw: str) -> dict[str, float]:
    """
    Parse ``name:seconds`` pairs separated by commas.

    A trailing comma, surrounding whitespace and surrounding single
    quotes are ignored, so ``''`` parses to an empty mapping.

    Args:
        raw: Output of the deadline query

    Returns:
        Mapping of deployment name to progress deadline in seconds

    Raises:
        DeadlineResolutionError: If a pair is malformed
    """
    deadlines: dict[str, float] = {}
    line = raw.strip().strip("'").strip()

    for pair in line.split(","):
        pair = pair.strip()
        if not pair:
            continue

        name, sep, value = pair.rpartition(":")
        if not sep or not name:
            raise DeadlineResolutionError(f"Malformed deadline entry {pair!r}")

        try:
            seconds = float(value)
        except ValueError as e:
            raise DeadlineResolutionError(
                f"Invalid deadline {value!r} for deployment {name}"
            ) from e

        if seconds <= 0:
            raise DeadlineResolutionError(
                f"Deadline for deployment {name} must be positive, got {value}"
            )
        deadlines[name] = seconds

    return deadlines


def resolve_deadlines(query: RolloutQuery, selector: str) -> dict[str, float]:
    """
    Query progress deadlines of all deployments matching ``selector``.

    Args:
        query: Cluster query mechanism
        selector: Label selector for the managed deployments

    Returns:
        Mapping of deployment name to progress deadline in seconds

    Raises:
        DeadlineResolutionError: If the query fails or its output is malformed
    """
    try:
        raw = query.get_deadlines(selector)
    except RolloutQueryError as e:
        raise DeadlineResolutionError(
            f"could not fetch deployments for {selector}: {e}"
        ) from e

    deadlines = parse_deadlines(raw)
    logger.info(f"Found {len(deadlines)} deployments matching {selector}")
    return deadlines

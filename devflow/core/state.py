"""Run configuration resolved from CLI flags."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from devflow.core.constants import (
    ACTION_FLAGS,
    LONG_ACTION_FLAGS,
    LONG_SWITCHES,
    LONG_VALUE_OPTIONS,
    SHORT_ACTION_FLAGS,
    VERBOSE_FLAG,
)
from devflow.utils.theme import normalize_mode


@dataclass(frozen=True)
class RunConfig:
    """Immutable options for one invocation."""

    color_mode: str
    verbose: bool
    single_action: Optional[str] = None
    plain: bool = False
    strict: bool = False


def first_action(flag_order: Sequence[str]) -> Optional[str]:
    """Return the first action flag seen on the command line."""
    for name in flag_order:
        if name in ACTION_FLAGS:
            return name
    return None


def build_run_config(
    flag_order: Sequence[str],
    mode: Optional[str] = None,
    verbose: bool = False,
    plain: bool = False,
    strict: bool = False,
    legacy_order: bool = False,
) -> RunConfig:
    """Resolve collected flags into a RunConfig.

    ``flag_order`` lists the boolean flags that were set, in command-line
    order. With ``legacy_order`` a ``-v`` given after the action flag has no
    effect on that action.
    """
    action = first_action(flag_order)

    if legacy_order and action is not None:
        cutoff = list(flag_order).index(action)
        verbose = VERBOSE_FLAG in list(flag_order)[:cutoff]

    return RunConfig(
        color_mode=normalize_mode(mode),
        verbose=verbose,
        single_action=action,
        plain=plain,
        strict=strict,
    )


def args_through_first_action(args: Sequence[str]) -> Optional[List[str]]:
    """Cut ``args`` just after the first action flag.

    Returns None when something other than a known flag comes before any
    action flag, or when there is no action flag at all.
    """
    tokens = list(args)
    kept: List[str] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token in LONG_ACTION_FLAGS:
            return kept + [token]
        if token in LONG_SWITCHES:
            kept.append(token)
            index += 1
            continue
        name, has_value, _ = token.partition("=")
        if name in LONG_VALUE_OPTIONS:
            width = 1 if has_value else 2
            if index + width > len(tokens):
                return None
            kept.extend(tokens[index : index + width])
            index += width
            continue
        if not token.startswith("-") or token.startswith("--") or len(token) < 2:
            return None

        cluster = token[1:]
        width = 1
        for pos, char in enumerate(cluster):
            if char in SHORT_ACTION_FLAGS:
                return kept + ["-" + cluster[: pos + 1]]
            if char == "m":
                # -m takes the rest of the cluster, or the next token, as its value
                if pos + 1 == len(cluster):
                    width = 2
                break
            if char != "v":
                return None
        if index + width > len(tokens):
            return None
        kept.extend(tokens[index : index + width])
        index += width
    return None

"""Command-line arguments for Ranorex test executables."""

import logging
from collections.abc import Iterable, Mapping

from ranorex_engine.models.request import TestRunParameter

log = logging.getLogger(__name__)

SCRIPT_ARGUMENTS_SEPARATOR = "|"


def split_script_reference(reference: str) -> tuple[str, str]:
    """Split a linked script reference into its path and extra arguments.

    A reference such as ``C:\\Tests\\Login.exe|/tc:Smoke`` carries arguments
    for the runner after the first separator.
    """
    path, _, extra_args = reference.partition(SCRIPT_ARGUMENTS_SEPARATOR)
    return path, extra_args


def collect_parameters(
    parameters: Iterable[TestRunParameter] | None,
) -> dict[str, str]:
    """Map trimmed parameter names to values, keeping the first of duplicates."""
    collected: dict[str, str] = {}
    for parameter in parameters or ():
        name = parameter.name.strip()
        if name in collected:
            log.debug("Ignoring duplicate test run parameter %s", name)
            continue
        collected[name] = parameter.value
    return collected


def build_arguments(
    result_file: str,
    parameters: Mapping[str, str],
    extra_args: str = "",
) -> str:
    """Compose the argument string for a Ranorex test executable.

    Args:
        result_file: Path the runner writes its report to (``/rf``)
        parameters: Global parameters passed as ``/param:name="value"``
        extra_args: User-specified arguments, appended verbatim when not blank

    Returns:
        The composed argument string

    """
    parts = [f'/rf:"{result_file}"']
    parts.extend(f'/param:{name}="{value}"' for name, value in parameters.items())
    if extra_args.strip():
        parts.append(extra_args)
    return " ".join(parts)


def split_arguments(arguments: str) -> list[str]:
    """Split an argument string into argv the way a Windows command line is.

    Double quotes group and are removed while backslashes stay literal, so
    ``/rf:"C:\\out dir\\r.rxlog"`` becomes a single ``/rf:C:\\out dir\\r.rxlog``.
    Backslashes only escape a following quote, and a quote left open runs to
    the end of the string.
    """
    argv: list[str] = []
    current: list[str] = []
    in_token = False
    in_quotes = False
    i = 0

    while i < len(arguments):
        char = arguments[i]
        if char == "\\":
            end = i
            while end < len(arguments) and arguments[end] == "\\":
                end += 1
            count = end - i
            if end < len(arguments) and arguments[end] == '"':
                current.append("\\" * (count // 2))
                if count % 2:
                    current.append('"')
                    end += 1
            else:
                current.append("\\" * count)
            in_token = True
            i = end
            continue

        if char == '"':
            in_quotes = not in_quotes
            in_token = True
        elif char in " \t" and not in_quotes:
            if in_token:
                argv.append("".join(current))
                current = []
                in_token = False
        else:
            current.append(char)
            in_token = True
        i += 1

    if in_token:
        argv.append("".join(current))
    return argv

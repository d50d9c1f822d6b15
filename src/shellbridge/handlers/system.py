"""Accounts, processes, quotas and disk usage."""

from __future__ import annotations

import re

from loguru import logger

from ..errors import CommandFailedError, MissingArgumentError, PermissionDeniedError, TooManyArgumentsError
from ..executor import ExecutionResult, cmd_argv, powershell_argv, ps_quote
from ..paths import tokenize
from .base import HandlerContext, SpecialResult

QUOTA_UNSUPPORTED = "This system does not support quotas"
_DRIVE = re.compile(r"^[A-Za-z]:$")


def _single_name(raw: str, command: str, what: str) -> str:
    tokens = tokenize(raw)
    if not tokens:
        raise MissingArgumentError(f"{command} requires a {what} argument")
    if len(tokens) > 1:
        raise TooManyArgumentsError(f"{command} takes a single {what}")
    return tokens[0]


# --- accounts ---
# sudo runs with -n so a password prompt fails instead of blocking; any
# failure is reported as a privilege problem.

def add_user_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    name = _single_name(raw, "addUser", "username")
    ctx.run_checked(["sudo", "-n", "useradd", "-m", name], "Failed to add user (Need sudo)", PermissionDeniedError)
    return SpecialResult(f"Added user: {name}", classify=False)


def add_user_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    name = _single_name(raw, "addUser", "username")
    ctx.run_checked(
        cmd_argv("net", "user", name, "/add"),
        "Failed to add user (Admin required)",
        PermissionDeniedError,
    )
    return SpecialResult(f"Added user: {name}", classify=False)


def add_group_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    name = _single_name(raw, "addGroup", "groupname")
    ctx.run_checked(["sudo", "-n", "groupadd", name], "Failed to add group (Need sudo)", PermissionDeniedError)
    return SpecialResult(f"Added group: {name}", classify=False)


def add_group_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    name = _single_name(raw, "addGroup", "groupname")
    ctx.run_checked(
        cmd_argv("net", "localgroup", name, "/add"),
        "Failed to add group (Admin required)",
        PermissionDeniedError,
    )
    return SpecialResult(f"Added group: {name}", classify=False)


# --- processes ---

def ps_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    return SpecialResult(ctx.run_checked(["ps", "aux", *tokenize(raw)], "ps failed"))


def ps_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    return SpecialResult(ctx.run_checked(cmd_argv("tasklist", *tokenize(raw)), "tasklist failed"))


# --- quotas ---

def _quota_result(result: ExecutionResult, failure: str) -> SpecialResult:
    if QUOTA_UNSUPPORTED in result.output:
        logger.warning("quotacheck.unsupported exit_code={}", result.exit_code)
        return SpecialResult("Quotas are not enabled on this system", classify=False)
    if not result.ok:
        raise CommandFailedError(failure, result.output)
    return SpecialResult(result.output)


def quotacheck_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    options = tokenize(raw) or ["-avug"]
    result = ctx.run(["sudo", "-n", "quotacheck", *options])
    return _quota_result(result, "quotacheck failed (Need sudo)")


def quotacheck_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    argv = cmd_argv("fsutil", "quota", "query")
    tokens = tokenize(raw)
    if tokens and _DRIVE.match(tokens[0]):
        argv.append(tokens[0])

    outcome = _quota_result(ctx.run(argv), "Failed to check quotas")
    if not outcome.message.strip():
        return SpecialResult("No quota information available (quotas may be disabled)", classify=False)
    return outcome


# --- disk usage ---

def du_posix(ctx: HandlerContext, raw: str) -> SpecialResult:
    targets = tokenize(raw) or ["."]
    return SpecialResult(ctx.run_checked(["du", "-h", *targets], "du failed"))


_DIRECTORY_SIZE_SCRIPT = (
    "Get-ChildItem -LiteralPath {folder} -Recurse -File | "
    "Measure-Object -Property Length -Sum | "
    "Select-Object @{{Name='Size (MB)';Expression={{[math]::Round($_.Sum / 1MB, 2)}}}}, "
    "@{{Name='Size (GB)';Expression={{[math]::Round($_.Sum / 1GB, 2)}}}}"
)


def du_windows(ctx: HandlerContext, raw: str) -> SpecialResult:
    tokens = tokenize(raw)
    folder = ctx.existing(tokens[0], label="Directory not found") if tokens else ctx.cwd
    script = _DIRECTORY_SIZE_SCRIPT.format(folder=ps_quote(folder))
    return SpecialResult(ctx.run_checked(powershell_argv(script), "du failed"))

from concurrent.futures import ThreadPoolExecutor
import functools
import sys
import time
from typing import Optional

import click
import structlog

from hash_tickler import challenge_service
from hash_tickler.algorithm.matcher import HashBackendError, HashSuite, Matcher
from hash_tickler.challenge_service import ChallengeServiceError
from hash_tickler.cracker import DEFAULT_PROGRESS_EVERY, CrackInterrupted, run
from hash_tickler.logs import configure_logging
from hash_tickler.models.match_result import EXIT_ERROR, Found, MatchResult, exit_code
from hash_tickler.models.password_spec import ConfigurationError, PasswordSpec
from hash_tickler.models.target import Target
from hash_tickler.progress_queue import SingleSlotQueue
from hash_tickler.progress_snapshot import ProgressSnapshot
from hash_tickler.ui import ui_loop
from hash_tickler.utils import build_spec

DEFAULT_ALPHABET = "lower"
DEFAULT_LENGTH = 6
DEMO_LENGTH = 4
ENVVAR_PREFIX = "HASH_TICKLER"

FATAL_ERRORS = (ConfigurationError, HashBackendError, ChallengeServiceError, CrackInterrupted)

log = structlog.get_logger()


class CrackError(click.ClickException):
    exit_code = EXIT_ERROR


@click.group()
@click.option("--log-json", is_flag=True, help="Emit log lines as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Include debug log lines")
def cli(log_json: bool, verbose: bool):
    configure_logging(json_logs=log_json, verbose=verbose)


def cracking_options(default_length: int = DEFAULT_LENGTH):
    """Options shared by every command that runs the cracker."""
    def decorator(fn):
        options = [
            click.option("--alphabet", "-a", default=DEFAULT_ALPHABET, show_default=True,
                         help=("Preset name (lower, upper, digits, alnum, hex, printable), @file with one symbol "
                               "per line, or literal symbols. Use literal:SYMBOLS when the symbols spell a preset name")),
            click.option("--separator", "-s", default=None,
                         help="Split a literal alphabet into multi-character symbols"),
            click.option("--length", "-l", type=click.IntRange(min=1), default=default_length, show_default=True),
            click.option("--algorithm", type=click.Choice([s.value for s in HashSuite], case_sensitive=False),
                         default=HashSuite.SHA_256.value, show_default=True),
            click.option("--progress-every", type=click.IntRange(min=1), default=DEFAULT_PROGRESS_EVERY,
                         show_default=True, help="Report progress every N candidates"),
            click.option("--start", type=click.IntRange(min=0), default=0,
                         help="Resume at a recorded counter value"),
            click.option("--timeout", type=click.FloatRange(min=0, min_open=True), default=None,
                         help="Give up after this many seconds, checked at progress boundaries"),
            click.option("--no-ui", is_flag=True, help="Log progress lines instead of the live view"),
        ]
        for option in reversed(options):
            fn = option(fn)
        return fn
    return decorator


def fatal_errors(fn):
    """Turn fatal domain errors into a one line message and exit code 3."""
    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except FATAL_ERRORS as e:
            log.error("run failed", error=str(e), error_type=type(e).__name__)
            raise CrackError(str(e)) from e
        except KeyboardInterrupt:
            log.error("run failed", error="interrupted by user", error_type="KeyboardInterrupt")
            raise CrackError("interrupted by user") from None
    return wrapper


def log_progress(state: ProgressSnapshot) -> None:
    log.info(
        "progress",
        last=state.last,
        tried=state.tried,
        remains=state.remaining,
        elapsed=int(state.elapsed),
    )


def cracker(
    spec: PasswordSpec,
    target: Target,
    *,
    algorithm: str = HashSuite.SHA_256.value,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
    start: int = 0,
    timeout: Optional[float] = None,
    show_ui: bool = True,
) -> MatchResult:
    """Crack the target, rendering progress from the main thread while a worker runs the search."""
    matcher = Matcher(target, algorithm)
    progress_queue: SingleSlotQueue[ProgressSnapshot] = SingleSlotQueue()
    deadline = time.monotonic() + timeout if timeout else None

    def report(state: ProgressSnapshot) -> None:
        if show_ui and progress_queue.closed:
            raise CrackInterrupted("interrupted by user")
        if deadline is not None and time.monotonic() >= deadline:
            raise CrackInterrupted(f"timed out after {timeout:g}s")
        if show_ui:
            progress_queue.publish(state)
        else:
            log_progress(state)

    log.info("passwords to test", total=spec.total, alphabet=str(spec.alphabet), length=spec.length)
    crack = functools.partial(run, spec, target, matcher, report, progress_every=progress_every, start=start)

    if not show_ui:
        try:
            return crack()
        except KeyboardInterrupt:
            raise CrackInterrupted("interrupted by user") from None

    def crack_then_close() -> MatchResult:
        try:
            return crack()
        finally:
            # Always close the queue so the UI can exit.
            progress_queue.close()

    with ThreadPoolExecutor(max_workers=1) as executor:
        future = executor.submit(crack_then_close)

        try:
            ui_loop(progress_queue)
        except KeyboardInterrupt:
            progress_queue.close()

        return future.result()


def crack_challenge(origin: str, params: Optional[dict], alphabet: str, separator: Optional[str],
                    length: int, algorithm: str, progress_every: int, start: int,
                    timeout: Optional[float], no_ui: bool) -> None:
    spec = build_spec(alphabet, length, separator)
    target = challenge_service.generate(origin, params=params)
    result = cracker(spec, target, algorithm=algorithm, progress_every=progress_every,
                     start=start, timeout=timeout, show_ui=not no_ui)

    if isinstance(result, Found):
        flag = challenge_service.submit(target, result.candidate, origin)
        click.echo(f"valid password found: {result.candidate}")
        click.echo(flag)
    else:
        click.echo("search space exhausted without a match", err=True)
    click.get_current_context().exit(exit_code(result))


@cli.command()
@click.option("--origin", default=challenge_service.DEFAULT_ORIGIN, show_default=True,
              help="Challenge service base URL")
@cracking_options()
@fatal_errors
def crack(origin: str, **options):
    """Fetch a challenge, crack it and submit the answer."""
    crack_challenge(origin, None, **options)


@cli.command()
@click.option("--origin", default=challenge_service.DEMO_ORIGIN, show_default=True,
              help="Demo API base URL")
@cracking_options(default_length=DEMO_LENGTH)
@fatal_errors
def demo(origin: str, **options):
    """Crack a short challenge from the local demo API."""
    crack_challenge(origin, {"length": options["length"]}, **options)


@cli.command()
@click.option("--hash", "hash_hex", required=True, help="Target digest, hex encoded")
@click.option("--salt", "salt_hex", default="", help="Salt, hex encoded")
@cracking_options()
@fatal_errors
def solve(hash_hex: str, salt_hex: str, alphabet: str, separator: Optional[str], length: int,
          algorithm: str, progress_every: int, start: int, timeout: Optional[float], no_ui: bool):
    """Crack a given salted digest and print the password."""
    try:
        target = Target.from_hex(hash_hex, salt_hex)
    except ValueError as e:
        raise click.BadParameter(str(e)) from e

    spec = build_spec(alphabet, length, separator)
    result = cracker(spec, target, algorithm=algorithm, progress_every=progress_every,
                     start=start, timeout=timeout, show_ui=not no_ui)

    if isinstance(result, Found):
        click.echo(result.candidate)
    else:
        click.echo("search space exhausted without a match", err=True)
    click.get_current_context().exit(exit_code(result))


@cli.command("demo-api")
@click.option("--host", default="127.0.0.1", help="Host to bind the server to")
@click.option("--port", default=8000, help="Port to bind the server to")
@click.option("--reload", is_flag=True, help="Enable auto-reload for development")
def demo_api(host: str, port: int, reload: bool):
    """Start the demo challenge API for local cracking runs."""
    try:
        import uvicorn
        from demo_api.api import app
    except ImportError as e:
        click.echo(f"Error: Demo API dependencies not available: {e}")
        click.echo("Install with: pip install 'hash-tickler[demo]'")
        raise click.Abort()

    click.echo(f"Starting demo API server on http://{host}:{port}")
    click.echo("Available endpoints:")
    click.echo("  - POST /challenges?length=N        - Generate a challenge")
    click.echo("  - POST /challenges/{id}/answer     - Submit an answer")
    click.echo("\nPress Ctrl+C to stop the server")

    if reload:
        # Use import string for reload mode
        uvicorn.run("demo_api.api:app", host=host, port=port, reload=True)
    else:
        uvicorn.run(app, host=host, port=port, reload=False)


def main():
    """Run the CLI, keeping exit code 1 for an exhausted search only."""
    try:
        status = cli.main(auto_envvar_prefix=ENVVAR_PREFIX, standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(EXIT_ERROR)
    except Exception:
        log.exception("unexpected error")
        sys.exit(EXIT_ERROR)
    sys.exit(status if isinstance(status, int) else 0)


if __name__ == "__main__":
    main()

from __future__ import annotations
import logging
from typing import List, Optional

import typer

from sigconform import (
    AllocationFailure,
    HarnessConfig,
    SchemeError,
    SchemeParameters,
    ScratchSizes,
    SignatureScheme,
    registry,
    run_suite,
)
from .runners.common import _load_adapters, export_json, get_scheme

app = typer.Typer(add_completion=False, help="Signature scheme conformance harness")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _config(iterations: Optional[int], message_length: Optional[int]) -> HarnessConfig:
    overrides = {}
    if iterations is not None:
        overrides["iterations"] = iterations
    if message_length is not None:
        overrides["message_length"] = message_length
    try:
        return HarnessConfig(**overrides)
    except ValueError as exc:
        typer.echo(f"Invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)


def _execute(schemes: List[SignatureScheme], config: HarnessConfig, export: str) -> None:
    """Run the suite once per scheme and exit with the summed scenario codes."""
    reports = []
    for scheme in schemes:
        typer.echo(scheme.params.algname)
        try:
            report = run_suite(scheme, config)
        except (AllocationFailure, SchemeError) as exc:
            typer.echo(f"ERROR {exc}", err=True)
            # Suites that already finished still get exported.
            export_json(reports, export)
            raise typer.Exit(code=1)
        for failed in report.failures():
            typer.echo(f"[{failed.scenario}] {failed.detail}", err=True)
        reports.append(report)
    export_json(reports, export)
    raise typer.Exit(code=sum(r.exit_code for r in reports))


@app.command("list-schemes")
def list_schemes():
    """List registered signature schemes available via adapters."""
    _load_adapters()
    for name in registry.list().keys():
        typer.echo(f"- {name}")


@app.command()
def run(
    names: List[str] = typer.Argument(..., help="Registered scheme names (see list-schemes)."),
    iterations: Optional[int] = typer.Option(None, help="Iterations per scenario (default 5 or SIGCONFORM_ITERATIONS)."),
    message_length: Optional[int] = typer.Option(None, help="Message length in bytes (default 1024)."),
    export: str = typer.Option("", help="Write a JSON report to this path."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every iteration."),
):
    """Run the conformance suite against registered schemes."""
    _configure_logging(verbose)
    _load_adapters()
    config = _config(iterations, message_length)
    schemes = []
    for name in names:
        try:
            schemes.append(get_scheme(name))
        except KeyError as exc:
            typer.echo(f"ERROR {exc.args[0]}", err=True)
            raise typer.Exit(code=1)
        except RuntimeError as exc:
            typer.echo(f"ERROR {name}: {exc}", err=True)
            raise typer.Exit(code=1)
    _execute(schemes, config, export)


@app.command("run-native")
def run_native(
    lib: Optional[str] = typer.Argument(None, help="Shared library path (default: SIGCONFORM_NATIVE_LIB)."),
    namespace: str = typer.Option(..., help="Symbol prefix, e.g. PQCLEAN_MLDSA65_CLEAN."),
    algname: str = typer.Option(..., help="Algorithm identifier (CRYPTO_ALGNAME)."),
    public_key_bytes: int = typer.Option(..., help="CRYPTO_PUBLICKEYBYTES"),
    secret_key_bytes: int = typer.Option(..., help="CRYPTO_SECRETKEYBYTES"),
    signature_bytes: int = typer.Option(..., help="CRYPTO_BYTES"),
    keypair_scratch_bytes: Optional[int] = typer.Option(None, help="Scratch size for keypair (scratch-buffer variant)."),
    sign_scratch_bytes: Optional[int] = typer.Option(None, help="Scratch size for sign."),
    verify_scratch_bytes: Optional[int] = typer.Option(None, help="Scratch size for verify/open."),
    iterations: Optional[int] = typer.Option(None, help="Iterations per scenario."),
    message_length: Optional[int] = typer.Option(None, help="Message length in bytes."),
    export: str = typer.Option("", help="Write a JSON report to this path."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Bind a PQClean-style shared library via ctypes and run the suite."""
    from sigconform_native import NativeScheme

    _configure_logging(verbose)
    config = _config(iterations, message_length)
    scratch_opts = (keypair_scratch_bytes, sign_scratch_bytes, verify_scratch_bytes)
    if any(v is not None for v in scratch_opts) and not all(v is not None for v in scratch_opts):
        typer.echo("ERROR scratch-buffer variant needs all three scratch sizes", err=True)
        raise typer.Exit(code=2)
    scratch = ScratchSizes(*scratch_opts) if scratch_opts[0] is not None else None
    params = SchemeParameters(
        algname=algname,
        public_key_bytes=public_key_bytes,
        secret_key_bytes=secret_key_bytes,
        signature_bytes=signature_bytes,
        scratch=scratch,
    )
    try:
        scheme = NativeScheme.from_path(lib, namespace, params)
    except SchemeError as exc:
        typer.echo(f"ERROR {exc}", err=True)
        raise typer.Exit(code=1)
    _execute([scheme], config, export)


def app_main():
    app()

if __name__ == "__main__":
    app_main()

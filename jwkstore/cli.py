"""Command line interface for inspecting the key store."""

from __future__ import annotations

import asyncio
import json

import typer

from jwkstore import KeyStoreError, get_key_store

app = typer.Typer(help="CLI for the jwkstore key set")

keys_app = typer.Typer(help="Commands for managing the key set")

app.add_typer(keys_app, name="keys")


@app.callback()
def main() -> None:
    """jwkstore CLI entry point."""
    pass


def _fail(exc: KeyStoreError) -> None:
    typer.secho(f"Key store error: {exc}", fg=typer.colors.RED)
    raise typer.Exit(code=2)


@keys_app.command("init")
def keys_init() -> None:
    """
    Ensure the key set exists, generating it on first use.

    Safe to run repeatedly: an existing key set is loaded, never replaced.
    Run it once before starting services that share the store to avoid two
    processes generating competing keys.

    Example:
        jwkstore keys init
        # Output: sig-rs-0    RS256
        #         sig-ec-0    ES256
    """
    store = get_key_store()
    try:
        key_set = asyncio.run(store.get())
    except KeyStoreError as exc:
        _fail(exc)
    typer.echo(f"Key set ready at {store.storage.location}")
    for key in key_set.keys:
        typer.echo(f"{key.kid}\t{key.alg}\t{key.use or '-'}")


@keys_app.command("show")
def keys_show(
    public: bool = typer.Option(False, help="Strip private key material"),
) -> None:
    """
    Print the key set as a JWKS document.

    Example:
        jwkstore keys show --public
    """
    store = get_key_store()
    try:
        key_set = asyncio.run(store.get())
    except KeyStoreError as exc:
        _fail(exc)
    if public:
        typer.echo(json.dumps(key_set.public_jwks(), indent=2))
    else:
        typer.echo(key_set.to_json())


@keys_app.command("select")
def keys_select(
    alg: str,
    kid: str,
    public: bool = typer.Option(False, help="Strip private key material"),
) -> None:
    """
    Print the key a verifier would select for ``alg`` and ``kid``.

    Matching is exact and case-sensitive. Exits with code 1 when no key matches.

    Example:
        jwkstore keys select RS256 sig-rs-0 --public
    """
    store = get_key_store()
    try:
        key = asyncio.run(store.select_for_verify(alg, kid))
    except KeyStoreError as exc:
        _fail(exc)
    if key is None:
        typer.echo("Key not found")
        raise typer.Exit(code=1)
    typer.echo(json.dumps(key.public_jwk() if public else key.to_jwk(), indent=2))


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    app()

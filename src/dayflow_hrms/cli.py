"""Typer CLI for DayFlow HRMS."""

import asyncio
import secrets

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(name="dayflow", help="DayFlow HRMS: identity, credentials and sessions")
console = Console()


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind host"),
    port: int = typer.Option(5000, help="Bind port"),
):
    """Start the DayFlow HRMS API server."""
    import uvicorn
    from dayflow_hrms.app import create_app

    console.print(f"[bold green]Starting DayFlow HRMS on {host}:{port}[/bold green]")
    uvicorn.run(create_app(), host=host, port=port)


@app.command("temp-password")
def temp_password(
    count: int = typer.Option(1, min=1, help="Number of passwords to print"),
):
    """Generate temporary passwords (offline, nothing is stored)."""
    from dayflow_hrms.common.config import get_settings
    from dayflow_hrms.credentials.passwords import generate_temporary_password

    length = get_settings().temp_password_length
    for _ in range(count):
        typer.echo(generate_temporary_password(length))


@app.command("generate-secrets")
def generate_secrets(
    nbytes: int = typer.Option(64, min=32, help="Random bytes per secret"),
):
    """Print fresh access and refresh token signing secrets."""
    typer.echo(f"DAYFLOW_JWT_ACCESS_SECRET={secrets.token_hex(nbytes)}")
    typer.echo(f"DAYFLOW_JWT_REFRESH_SECRET={secrets.token_hex(nbytes)}")
    console.print("[yellow]Keep these out of version control.[/yellow]")


@app.command("format-login-id")
def format_login_id_cmd(
    tenant_code: str = typer.Argument(..., help="2-letter tenant code"),
    first_name: str = typer.Argument(...),
    last_name: str = typer.Argument(...),
    year: int = typer.Argument(..., help="Year of joining"),
    serial: int = typer.Argument(..., help="Serial number (1-9999)"),
):
    """Format a login id from explicit parts (no counter draw)."""
    from dayflow_hrms.common.exceptions import DayflowError
    from dayflow_hrms.loginid.generator import format_login_id

    try:
        login_id = format_login_id(tenant_code, first_name, last_name, year, serial)
    except (DayflowError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)
    console.print(f"[bold]{login_id}[/bold]")


@app.command("validate-login-id")
def validate_login_id(
    login_id: str = typer.Argument(..., help="Login id to validate"),
):
    """Validate a login id's format offline."""
    from dayflow_hrms.loginid.validator import validate_format

    result = validate_format(login_id)
    if result.valid:
        parts = result.parts
        console.print(f"[bold green]VALID[/bold green] — {result.message}")
        console.print(f"  Tenant: {parts.tenant_code}  Year: {parts.year}  Serial: {parts.serial}")
    else:
        console.print(f"[bold red]{result.code}[/bold red] — {result.message}")
        raise typer.Exit(1)


async def _list_tenants():
    from dayflow_hrms.deps import get_db, get_tenant_service

    db = get_db()
    await db.init()
    await db.create_all()
    try:
        async with db.get_session() as session:
            return await get_tenant_service().list_tenants(session)
    finally:
        await db.close()


@app.command("check-tenant-codes")
def check_tenant_codes():
    """List tenants and flag codes that do not have the configured length."""
    from dayflow_hrms.common.config import get_settings

    expected = get_settings().tenant_code_length
    tenants = asyncio.run(_list_tenants())
    if not tenants:
        console.print("No companies found in database")
        raise typer.Exit(1)

    table = Table("Company", "Code", "Length", "Tenant ID")
    invalid = []
    for tenant in tenants:
        style = "" if len(tenant.code) == expected else "red"
        table.add_row(tenant.name, tenant.code, str(len(tenant.code)), tenant.id, style=style)
        if len(tenant.code) != expected:
            invalid.append(tenant)
    console.print(table)

    if invalid:
        console.print(
            f"[bold yellow]WARNING:[/bold yellow] {len(invalid)} company code(s) "
            f"are not {expected} characters"
        )
        raise typer.Exit(1)


async def _set_tenant_code(tenant_id: str, code: str):
    from dayflow_hrms.deps import get_db, get_tenant_service

    db = get_db()
    await db.init()
    try:
        async with db.get_session() as session:
            return await get_tenant_service().override_code(session, tenant_id, code)
    finally:
        await db.close()


@app.command("set-tenant-code")
def set_tenant_code(
    tenant_id: str = typer.Argument(..., help="Tenant ID"),
    code: str = typer.Argument(..., help="New 2-letter company code"),
):
    """Override a tenant's code. Existing login ids keep their old prefix."""
    from dayflow_hrms.common.exceptions import DayflowError

    try:
        tenant = asyncio.run(_set_tenant_code(tenant_id, code))
    except DayflowError as e:
        console.print(f"[bold red]{e.code}[/bold red] — {e.message}")
        raise typer.Exit(1)
    if tenant is None:
        console.print(f"[bold red]NOT_FOUND[/bold red] — no tenant {tenant_id}")
        raise typer.Exit(1)
    console.print(f"[bold green]Updated[/bold green] {tenant.name} -> {tenant.code}")
    console.print("  Existing employee login ids keep the old code.")


@app.command()
def health(
    url: str = typer.Option("http://localhost:5000", help="Server URL"),
):
    """Check DayFlow HRMS server health."""
    import httpx

    try:
        resp = httpx.get(f"{url}/health", timeout=5)
        data = resp.json()
        console.print(f"[bold green]{data['status']}[/bold green] — v{data['version']}")
    except (httpx.HTTPError, ValueError, KeyError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()

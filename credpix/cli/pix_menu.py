from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from credpix.exceptions import PixContractError
from credpix.models.pix import HIDDEN_TXID, MAX_DESCRIPTION, PixCodeResult
from credpix.pix import parse_tlv, verify_checksum
from credpix.services.pix_service import PixService

console = Console()

FIELD_LABELS = {
    "00": "Payload Format Indicator",
    "26": "Merchant Account Information",
    "52": "Merchant Category Code",
    "53": "Transaction Currency",
    "54": "Transaction Amount",
    "58": "Country Code",
    "59": "Merchant Name",
    "60": "Merchant City",
    "62": "Additional Data Field Template",
    "63": "CRC16",
}


def _ask_amount() -> str | None:
    return questionary.text("Valor (ex: 25.50):").ask()


def _print_result(result: PixCodeResult) -> None:
    table = Table(title="PIX Estático")
    table.add_column("Campo", style="bold")
    table.add_column("Valor")
    table.add_row("Chave PIX", result.pix_key)
    table.add_row("Valor", f"R$ {result.amount}")
    table.add_row("Transação", result.transaction_id)
    if result.description:
        table.add_row("Descrição", result.description)
    console.print()
    console.print(table)
    console.print()
    console.print("[bold]PIX copia e cola:[/bold]")
    console.print(result.pix_code, soft_wrap=True)
    console.print(f"[dim]{result.qr_code_url}[/dim]", soft_wrap=True)


def generate_pix_menu(pix_service: PixService) -> None:
    console.print()
    console.print("[bold]Novo PIX Estático[/bold]", style="cyan")

    amount = _ask_amount()
    if not amount:
        console.print("[yellow]Operação cancelada.[/yellow]")
        return
    description = questionary.text(f"Descrição (opcional, até {MAX_DESCRIPTION} caracteres):").ask() or ""

    try:
        result = pix_service.generate(amount.replace(",", "."), description.strip()[:MAX_DESCRIPTION])
    except PixContractError as exc:
        console.print(f"[red]{exc}[/red]")
        return
    _print_result(result)


def regenerate_pix_menu(pix_service: PixService) -> None:
    console.print()
    console.print("[bold]Regenerar PIX[/bold]", style="cyan")

    txid = questionary.text(f"ID da transação ({HIDDEN_TXID} para ocultar):").ask()
    if not txid:
        console.print("[yellow]Operação cancelada.[/yellow]")
        return
    amount = _ask_amount()
    if not amount:
        console.print("[yellow]Operação cancelada.[/yellow]")
        return
    description = questionary.text("Descrição original (opcional):").ask() or ""

    try:
        result = pix_service.regenerate(amount.replace(",", "."), description, txid.strip())
    except PixContractError as exc:
        console.print(f"[red]{exc}[/red]")
        return
    _print_result(result)


def validate_key_menu(pix_service: PixService) -> None:
    pix_key = questionary.text("Chave PIX:").ask()
    if not pix_key:
        return
    if pix_service.classify(pix_key):
        console.print("[green]Chave PIX válida[/green]")
    else:
        console.print("[red]Chave PIX inválida[/red]")


def verify_code_menu() -> None:
    code = questionary.text("Código PIX (copia e cola):").ask()
    if not code:
        return
    code = code.strip()

    try:
        fields = parse_tlv(code)
    except PixContractError as exc:
        console.print(f"[red]Código malformado: {exc}[/red]")
        return

    table = Table(title="Campos do BR Code")
    table.add_column("ID", style="dim")
    table.add_column("Campo")
    table.add_column("Valor")
    for tag, value in fields:
        table.add_row(tag, FIELD_LABELS.get(tag, ""), value)
    console.print()
    console.print(table)

    if verify_checksum(code):
        console.print("[green bold]CRC16 confere.[/green bold]")
    else:
        console.print("[red bold]CRC16 não confere.[/red bold]")

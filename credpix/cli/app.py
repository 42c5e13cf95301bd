import questionary
from rich.console import Console

from credpix.cli.pix_menu import (
    generate_pix_menu,
    regenerate_pix_menu,
    validate_key_menu,
    verify_code_menu,
)
from credpix.services.factory import get_pix_service

console = Console()


def main_menu() -> None:
    pix_service = get_pix_service()

    console.print()
    console.print("[bold]Gestão de Crédito: PIX Estático[/bold]", style="cyan")
    console.print(f"[dim]Recebedor: {pix_service.profile.merchant_name} ({pix_service.profile.pix_key})[/dim]")
    console.print()

    while True:
        choice = questionary.select(
            "Menu Principal",
            choices=[
                "Gerar PIX",
                "Regenerar PIX",
                "Validar chave PIX",
                "Verificar código PIX",
                "Sair",
            ],
        ).ask()

        if choice is None or choice == "Sair":
            console.print("[bold]Até logo![/bold]")
            break
        elif choice == "Gerar PIX":
            generate_pix_menu(pix_service)
        elif choice == "Regenerar PIX":
            regenerate_pix_menu(pix_service)
        elif choice == "Validar chave PIX":
            validate_key_menu(pix_service)
        elif choice == "Verificar código PIX":
            verify_code_menu()

from decimal import Decimal
from unittest.mock import MagicMock, patch

from credpix.exceptions import PixContractError
from credpix.models.pix import PixCodeResult


def _result(**overrides) -> PixCodeResult:
    defaults = dict(
        pix_key="pix@example.com",
        pix_code="000201...6304ABCD",
        transaction_id="1234567890",
        amount=Decimal("10.00"),
        description="Lunch",
        qr_code_url="https://qr.test/?data=000201",
    )
    defaults.update(overrides)
    return PixCodeResult(**defaults)


class TestGeneratePixMenu:
    @patch("credpix.cli.pix_menu.questionary")
    def test_cancel_on_empty_amount(self, mock_q):
        from credpix.cli.pix_menu import generate_pix_menu

        mock_q.text.return_value.ask.return_value = ""
        service = MagicMock()
        generate_pix_menu(service)
        service.generate.assert_not_called()

    @patch("credpix.cli.pix_menu.questionary")
    def test_generates_with_comma_amount(self, mock_q):
        from credpix.cli.pix_menu import generate_pix_menu

        mock_q.text.return_value.ask.side_effect = ["25,50", "  Lunch  "]
        service = MagicMock()
        service.generate.return_value = _result()
        generate_pix_menu(service)
        service.generate.assert_called_once_with("25.50", "Lunch")

    @patch("credpix.cli.pix_menu.questionary")
    def test_truncates_description(self, mock_q):
        from credpix.cli.pix_menu import generate_pix_menu

        mock_q.text.return_value.ask.side_effect = ["10", "x" * 40]
        service = MagicMock()
        service.generate.return_value = _result()
        generate_pix_menu(service)
        service.generate.assert_called_once_with("10", "x" * 25)

    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_contract_error_printed(self, mock_q, mock_console):
        from credpix.cli.pix_menu import generate_pix_menu

        mock_q.text.return_value.ask.side_effect = ["-1", ""]
        service = MagicMock()
        service.generate.side_effect = PixContractError("Amount must be greater than zero: '-1'")
        generate_pix_menu(service)
        printed = " ".join(str(call.args[0]) for call in mock_console.print.call_args_list if call.args)
        assert "greater than zero" in printed


class TestRegeneratePixMenu:
    @patch("credpix.cli.pix_menu.questionary")
    def test_cancel_on_empty_txid(self, mock_q):
        from credpix.cli.pix_menu import regenerate_pix_menu

        mock_q.text.return_value.ask.return_value = None
        service = MagicMock()
        regenerate_pix_menu(service)
        service.regenerate.assert_not_called()

    @patch("credpix.cli.pix_menu.questionary")
    def test_cancel_on_empty_amount(self, mock_q):
        from credpix.cli.pix_menu import regenerate_pix_menu

        mock_q.text.return_value.ask.side_effect = ["***", ""]
        service = MagicMock()
        regenerate_pix_menu(service)
        service.regenerate.assert_not_called()

    @patch("credpix.cli.pix_menu.questionary")
    def test_regenerates(self, mock_q):
        from credpix.cli.pix_menu import regenerate_pix_menu

        mock_q.text.return_value.ask.side_effect = [" 1234567890 ", "10", "Lunch"]
        service = MagicMock()
        service.regenerate.return_value = _result()
        regenerate_pix_menu(service)
        service.regenerate.assert_called_once_with("10", "Lunch", "1234567890")

    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_contract_error_printed(self, mock_q, mock_console):
        from credpix.cli.pix_menu import regenerate_pix_menu

        mock_q.text.return_value.ask.side_effect = ["bad id!", "10", ""]
        service = MagicMock()
        service.regenerate.side_effect = PixContractError("Invalid transaction id: 'bad id!'")
        regenerate_pix_menu(service)
        printed = " ".join(str(call.args[0]) for call in mock_console.print.call_args_list if call.args)
        assert "Invalid transaction id" in printed


class TestValidateKeyMenu:
    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_valid(self, mock_q, mock_console):
        from credpix.cli.pix_menu import validate_key_menu

        mock_q.text.return_value.ask.return_value = "user@example.com"
        service = MagicMock()
        service.classify.return_value = True
        validate_key_menu(service)
        service.classify.assert_called_once_with("user@example.com")
        mock_console.print.assert_called_once_with("[green]Chave PIX válida[/green]")

    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_invalid(self, mock_q, mock_console):
        from credpix.cli.pix_menu import validate_key_menu

        mock_q.text.return_value.ask.return_value = "not-a-key"
        service = MagicMock()
        service.classify.return_value = False
        validate_key_menu(service)
        mock_console.print.assert_called_once_with("[red]Chave PIX inválida[/red]")

    @patch("credpix.cli.pix_menu.questionary")
    def test_cancel(self, mock_q):
        from credpix.cli.pix_menu import validate_key_menu

        mock_q.text.return_value.ask.return_value = None
        service = MagicMock()
        validate_key_menu(service)
        service.classify.assert_not_called()


class TestVerifyCodeMenu:
    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_valid_code(self, mock_q, mock_console, pix_service):
        from credpix.cli.pix_menu import verify_code_menu

        mock_q.text.return_value.ask.return_value = pix_service.generate(10).pix_code
        verify_code_menu()
        mock_console.print.assert_called_with("[green bold]CRC16 confere.[/green bold]")

    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_bad_checksum(self, mock_q, mock_console, pix_service):
        from credpix.cli.pix_menu import verify_code_menu

        code = pix_service.generate(10).pix_code
        bad = code[:-4] + ("0000" if code[-4:] != "0000" else "FFFF")
        mock_q.text.return_value.ask.return_value = bad
        verify_code_menu()
        mock_console.print.assert_called_with("[red bold]CRC16 não confere.[/red bold]")

    @patch("credpix.cli.pix_menu.console")
    @patch("credpix.cli.pix_menu.questionary")
    def test_malformed(self, mock_q, mock_console):
        from credpix.cli.pix_menu import verify_code_menu

        mock_q.text.return_value.ask.return_value = "0099abc"
        verify_code_menu()
        printed = str(mock_console.print.call_args.args[0])
        assert "Código malformado" in printed

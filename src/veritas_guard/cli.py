import typer
from veritas_guard.core.config_loader import CONFIG
from veritas_guard.core.logger_config import setup_logging
from veritas_guard.core.truth_checker import truth_checker_app
from veritas_guard.core.media_detector import media_detector_app
from veritas_guard.core.virality import virality_app
from veritas_guard.core.chat_assistant import chat_app


# --- : Startup Banner ---
BANNER = r"""
__     __        _ _               ____                     _
\ \   / /__ _ __(_) |_ __ _ ___   / ___|_   _  __ _ _ __ __| |
 \ \ / / _ \ '__| | __/ _` / __| | |  _| | | |/ _` | '__/ _` |
  \ V /  __/ |  | | || (_| \__ \ | |_| | |_| | (_| | | | (_| |
   \_/ \___|_|  |_|\__\__,_|___/  \____|\__,_|\__,_|_|  \__,_|
"""


def get_cli_app():
    """
    Creates the core Typer application and registers every command group.
    """
    app = typer.Typer(
        name="Veritas Guard",
        help="Fact-checking, deepfake screening and virality forecasting powered by Gemini.",
        add_completion=False,
        rich_markup_mode="markdown",
    )

    app.add_typer(
        truth_checker_app, name="check", help="Verify a claim against grounded search."
    )
    app.add_typer(
        media_detector_app, name="media", help="Screen images for deepfake artifacts."
    )
    app.add_typer(
        virality_app, name="virality", help="Forecast how fast a headline could spread."
    )
    app.add_typer(chat_app, name="chat", help="Talk to the media-literacy assistant.")

    @app.command(name="version", help="Show Veritas Guard version.")
    def version():
        """Show Veritas Guard version."""
        typer.echo(f"{CONFIG.app_name} v{CONFIG.version}")

    return app


app = get_cli_app()


def main():
    """
    Main entry point for the Veritas Guard CLI application.
    """
    print(BANNER)
    setup_logging()
    app()


if __name__ == "__main__":
    main()

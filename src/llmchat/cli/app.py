"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..config import ProviderConfig, SaveFormat, default_config
from ..errors import LLMChatError
from ..llm import AVAILABLE_MODELS, ChatMessage, ProviderKind
from ..logging_utils import configure_logging
from ..session import ChatSession
from ..transcript import load_transcript

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="llmchat",
    help="Terminal chat client for Anthropic, OpenAI, DeepSeek and Gemini models",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

DEFAULT_LOG_FILE = Path.home() / ".llmchat" / "logs" / "llmchat.log"

ROLE_STYLES = {
    "system": "magenta",
    "user": "blue",
    "assistant": "green",
}


def _build_config(
    provider: ProviderKind | None,
    model: str | None,
    temperature: float | None,
    max_tokens: int | None,
    system_prompt: str | None,
    save_dir: Path | None = None,
    save_format: SaveFormat | None = None,
) -> ProviderConfig:
    """Start-up config with command line overrides applied."""
    return default_config(
        provider=provider,
        model=model,
        temperature=temperature,
        max_tokens=max_tokens,
        system_prompt=system_prompt,
        save_directory=save_dir,
        save_format=save_format,
    )


@app.command()
def chat(
    provider: ProviderKind | None = typer.Option(
        None, "--provider", "-p", help="LLM provider (default: anthropic)"
    ),
    model: str | None = typer.Option(
        None, "--model", "-m", help="Model name; must be offered by the provider"
    ),
    temperature: float | None = typer.Option(
        None, "--temperature", "-t", help="Sampling temperature (default: 0.7)"
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Maximum output tokens (default: 1000)"
    ),
    system_prompt: str | None = typer.Option(
        None, "--system-prompt", "-s", help="System prompt sent with every request"
    ),
    save_dir: Path | None = typer.Option(
        None, "--save-dir", "-d", file_okay=False, help="Directory for saved chats"
    ),
    save_format: SaveFormat | None = typer.Option(
        None, "--format", "-f", help="Transcript format: json or markdown"
    ),
    log_level: str = typer.Option(
        "warning", "--log-level", "-l", help="Log level: debug, info, warning, or error"
    ),
    log_file: Path = typer.Option(
        DEFAULT_LOG_FILE, "--log-file", help="Log file (the TUI owns the terminal)"
    ),
):
    """Launch the interactive TUI chat interface."""
    configure_logging(log_level, log_file=log_file)

    async def _chat():
        from ..ui import run_chat_tui

        config = _build_config(
            provider, model, temperature, max_tokens, system_prompt, save_dir, save_format
        )
        session = ChatSession(config)
        await run_chat_tui(session)

    try:
        asyncio.run(_chat())
    except LLMChatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except KeyboardInterrupt:
        pass
    console.print("[dim]Goodbye![/dim]")


@app.command()
def ask(
    prompt: str = typer.Argument(..., help="Message to send"),
    provider: ProviderKind | None = typer.Option(
        None, "--provider", "-p", help="LLM provider (default: anthropic)"
    ),
    model: str | None = typer.Option(
        None, "--model", "-m", help="Model name; must be offered by the provider"
    ),
    temperature: float | None = typer.Option(
        None, "--temperature", "-t", help="Sampling temperature (default: 0.7)"
    ),
    max_tokens: int | None = typer.Option(
        None, "--max-tokens", help="Maximum output tokens (default: 1000)"
    ),
    system_prompt: str | None = typer.Option(
        None, "--system-prompt", "-s", help="System prompt sent with the request"
    ),
    save: bool = typer.Option(
        False, "--save", help="Save the exchange as a transcript"
    ),
    title: str | None = typer.Option(
        None, "--title", help="Transcript title (with --save)"
    ),
    save_dir: Path | None = typer.Option(
        None, "--save-dir", "-d", file_okay=False, help="Directory for saved chats"
    ),
    save_format: SaveFormat | None = typer.Option(
        None, "--format", "-f", help="Transcript format: json or markdown"
    ),
    log_level: str = typer.Option(
        "warning", "--log-level", "-l", help="Log level: debug, info, warning, or error"
    ),
):
    """Send a single message and print the reply."""
    configure_logging(log_level)

    async def _ask():
        config = _build_config(
            provider, model, temperature, max_tokens, system_prompt, save_dir, save_format
        )
        async with ChatSession(config) as session:
            conversation = [ChatMessage.user(prompt)]
            with console.status(f"[dim]{config.provider.value}/{config.model} is thinking...[/dim]"):
                reply = await session.send_message(conversation)
            console.print(Panel(Markdown(reply), title="Assistant", border_style="green"))

            if save:
                conversation.append(ChatMessage.assistant(reply))
                path = session.save_transcript(conversation, title)
                console.print(f"[green]Chat saved to: {path}[/green]")

    try:
        asyncio.run(_ask())
    except LLMChatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


@app.command()
def models(
    provider: ProviderKind | None = typer.Option(
        None, "--provider", "-p", help="Only list this provider's models"
    ),
):
    """List the models each provider offers."""
    table = Table(title="Available Models")
    table.add_column("Provider", style="cyan")
    table.add_column("Model")
    table.add_column("Default", justify="center")

    for kind, names in AVAILABLE_MODELS.items():
        if provider is not None and kind != provider:
            continue
        for index, name in enumerate(names):
            table.add_row(kind.value, name, "*" if index == 0 else "")

    console.print(table)


@app.command()
def show(
    path: Path = typer.Argument(
        ...,
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="JSON transcript to display"
    ),
):
    """Display a saved JSON transcript."""
    try:
        transcript = load_transcript(path)
    except LLMChatError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    except ValidationError:
        console.print(f"[red]Error: {path} is not a JSON transcript[/red]")
        raise typer.Exit(code=1)

    console.print(
        f"[bold]Chat - {transcript.timestamp}[/bold]\n"
        f"[dim]Model: {transcript.model} ({transcript.provider})[/dim]\n"
    )
    for message in transcript.messages:
        console.print(Panel(
            Text(message.content),
            title=message.role.capitalize(),
            title_align="left",
            border_style=ROLE_STYLES[message.role],
        ))


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()

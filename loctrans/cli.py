"""
Command-line interface for LocTrans.

Provides commands for:
- Translating localization files
- Checking configuration and the Ollama connection
- Translating a single string (quick test)

Usage:
    loctrans translate --pattern "./translations/*.json" --langs en,es,de
    loctrans check
    loctrans test --text "Bonjour le monde" --from fr --to en
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from loctrans import __version__
from loctrans.config import TranslationConfig, parse_languages
from loctrans.errors import LocTransError, PortUnavailableError
from loctrans.models import TranslationRequest, TranslationStats
from loctrans.pipeline import TranslationPipeline
from loctrans.translate.base import Translator, create_translator

app = typer.Typer(
    name="loctrans",
    help="LocTrans: automated translation of JSON/YAML localization files with Ollama",
    add_completion=False,
)
console = Console()


def setup_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def version_callback(value: bool):
    if value:
        console.print(f"LocTrans v{__version__}")
        raise typer.Exit()


def fail(message: str) -> None:
    console.print(f"[red]Error:[/] {escape(message)}", style="bold")
    raise typer.Exit(1)


def require_translator(config: TranslationConfig) -> Translator:
    """Create the Ollama translator and make sure it can serve requests."""
    translator = create_translator("ollama", config)
    with console.status("Checking Ollama connection..."):
        available = translator.check_availability()
    if not available:
        console.print(f"[yellow]Required model:[/] {config.model}")
        console.print("[yellow]Make sure Ollama is running and the model is pulled.[/]")
        raise PortUnavailableError("Ollama is not available or the model is not installed")
    console.print(f"[green]✓ Ollama connection OK[/] ({config.model})")
    return translator


def print_config(config: TranslationConfig, title: str = "Current Configuration") -> None:
    table = Table(title=title)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")
    for key, value in config.to_dict().items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)


def print_stats(stats: TranslationStats) -> None:
    table = Table(title="Translation Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    for key, value in stats.to_dict().items():
        table.add_row(key.replace("_", " ").title(), str(value))
    console.print(table)


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """LocTrans: translate localization files with a local LLM."""
    pass


@app.command()
def translate(
    pattern: Optional[str] = typer.Option(
        None, "--pattern", "-p",
        help='Glob pattern of files to translate (e.g. "./translations/*.json"); default: JSON/YAML files in TRANSLATIONS_DIR',
    ),
    langs: Optional[str] = typer.Option(
        None, "--langs", "-l",
        help="Comma separated target languages (default: DEFAULT_TARGET_LANGS)",
    ),
    source: Optional[str] = typer.Option(
        None, "--source", "-s",
        help="Source language (default: DEFAULT_SOURCE_LANG)",
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Output directory; one sub-directory per language",
    ),
    file_name: Optional[str] = typer.Option(
        None, "--file", "-f",
        help="Output file name inside each language directory (single input only)",
    ),
    model: Optional[str] = typer.Option(
        None, "--model", "-m",
        help="Ollama model name",
    ),
    host: Optional[str] = typer.Option(
        None, "--host",
        help="Ollama server URL",
    ),
    concurrency: Optional[int] = typer.Option(
        None, "--concurrency", "-c",
        help="Maximum concurrent requests (1-10)",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Show debug logging",
    ),
):
    """Translate localization files with Ollama."""
    setup_logging(verbose)
    
    try:
        config = TranslationConfig.from_env(
            source_lang=source,
            target_langs=parse_languages(langs) if langs else None,
            output_dir=output,
            output_file_name=file_name,
            model=model,
            ollama_host=host,
            max_concurrent_requests=concurrency,
        )
        console.print(f"[cyan]Output directory:[/] {config.output_dir}")
        translator = require_translator(config)
        
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Processing files...", total=100)
            
            def update_progress(msg: str, pct: float):
                progress.update(task, description=msg, completed=int(pct * 100))
            
            async def run() -> TranslationStats:
                async with TranslationPipeline(config, translator, update_progress) as pipeline:
                    return await pipeline.process_files(pattern, config.target_langs)
            
            stats = asyncio.run(run())
    except LocTransError as e:
        fail(str(e))
    
    console.print("\n[bold green]Translation complete![/]\n")
    print_stats(stats)
    
    if stats.failed_requests:
        console.print(
            f"[yellow]{stats.failed_requests} string(s) could not be translated and were left empty.[/]"
        )
    if not stats.success:
        console.print(f"[red]{len(stats.errors)} file/language pair(s) failed:[/]")
        for error in stats.errors:
            console.print(f"  - {escape(error)}")
    
    console.print(f"\n[green]✓ Files saved in:[/] {config.output_dir}")


@app.command()
def check():
    """Check the configuration and the Ollama connection."""
    setup_logging()
    
    try:
        config = TranslationConfig.from_env()
    except LocTransError as e:
        fail(f"Invalid configuration: {e}")
    console.print("[green]✓ Configuration valid[/]")
    
    translator = create_translator("ollama", config)
    with console.status("Testing Ollama connection..."):
        available = translator.check_availability()
    
    if available:
        console.print(f"[green]✓ Ollama connected with model {config.model}[/]")
    else:
        console.print("[red]✗ Cannot connect to Ollama[/]")
        console.print("[yellow]Make sure Ollama is running and the model is pulled.[/]")
    
    print_config(config)


@app.command()
def test(
    text: str = typer.Option(
        ..., "--text", "-t",
        help="Text to translate",
    ),
    from_lang: Optional[str] = typer.Option(
        None, "--from", "-f",
        help="Source language (default: DEFAULT_SOURCE_LANG)",
    ),
    to_lang: str = typer.Option(
        "en", "--to",
        help="Target language",
    ),
):
    """Quick translation test of a single text."""
    setup_logging()
    
    try:
        config = TranslationConfig.from_env()
        translator = require_translator(config)
        source_lang = from_lang or config.source_lang
        request = TranslationRequest(text=text, source_lang=source_lang, target_lang=to_lang)
        
        async def run():
            async with translator:
                return await translator.translate(request)
        
        with console.status("Translating..."):
            result = asyncio.run(run())
    except LocTransError as e:
        fail(str(e))
    
    console.print("\n[bold cyan]Result:[/]")
    console.print(f"  Original ({source_lang}): \"{escape(text)}\"")
    console.print(f"  Translation ({to_lang}): \"{escape(result.translated_text)}\"")
    console.print(f"  Model: {result.model}")

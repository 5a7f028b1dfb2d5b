import logging

import typer
from rich import print
from newsbot.config.settings import get_settings
from newsbot.db.database import init_db
from newsbot.workflows.scheduler import run_locked, run_scheduled
from newsbot.tools.logging_setup import setup_logging
setup_logging()

logger = logging.getLogger(__name__)

app = typer.Typer(help="LLM security news bot: feed -> relevance check -> subreddit post")


def _status(ok) -> str:
    return "[green]set[/green]" if ok else "[red]missing[/red]"


@app.command()
def doctor():
    """Check config + DB connectivity."""
    s = get_settings()
    print("[bold green]Config loaded[/bold green]")
    print("Feed:", s.feed_url)
    print("OpenAI:", s.openai_model, "| Key:", _status(s.openai_key))
    print("Subreddit:", f"r/{s.subreddit_name}", "| Reddit credentials:", _status(s.reddit_configured))
    print("Cap:", s.max_posts_per_run, "post(s)/run | Every", s.schedule_interval_hours, "hours | Markers kept", s.marker_ttl_days, "days")
    init_db()
    print("[bold green]DB OK[/bold green]")


@app.command()
def run():
    """Run the fetch-and-post pipeline once, now."""
    print("Fetching news now...")
    try:
        result = run_locked()
        if result is None:
            print("[yellow]Another run is in progress[/yellow]")
        else:
            print(result)
    except Exception as e:
        logger.exception("Manual run failed")
        print(f"[bold red]Run failed[/bold red]: {e}")
    print("[bold green]Fetch complete. Check logs.[/bold green]")


@app.command()
def start():
    """Run the pipeline on a fixed schedule until interrupted."""
    s = get_settings()
    print(f"[bold green]Security Bot Started! (Runs every {s.schedule_interval_hours} hours)[/bold green]")
    init_db()
    run_scheduled()


if __name__ == "__main__":
    app()

import asyncio
import json
import typer
from typing import Optional

from app.api.summarize import UrlSummarizer
from app.config import Config, config
from app.exceptions import VerdictError


app = typer.Typer()


async def run_summarizer(url: str, settings: Config) -> dict:
    summarizer = UrlSummarizer.from_config(settings)
    try:
        result = await summarizer.summarize(url)
    finally:
        await summarizer.aclose()
    return result.model_dump(by_alias=True, exclude_none=True)


@app.command()
def check_url(url: str, model: Optional[str] = typer.Option(None, help="Override the GROQ_MODEL setting")):
    settings = config.model_copy(update={"GROQ_MODEL": model}) if model else config
    try:
        result = asyncio.run(run_summarizer(url, settings))
    except VerdictError as e:
        typer.echo(json.dumps({"error": e.message}), err=True)
        raise typer.Exit(code=1)
    typer.echo(json.dumps(result))


@app.command()
def serve(host: str = "0.0.0.0", port: int = 8000):
    import uvicorn
    typer.echo(f"Starting server on {host}:{port}...")
    uvicorn.run("app.main:my_app", host=host, port=port, timeout_keep_alive=60)


if __name__ == "__main__":
    app()

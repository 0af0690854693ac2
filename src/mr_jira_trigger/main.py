# src/mr_jira_trigger/main.py
import argparse
import logging
import sys
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, ValidationError

from mr_jira_trigger import __version__
from mr_jira_trigger.config import Settings, load_config
from mr_jira_trigger.errors import ConfigError, UnsupportedStateError
from mr_jira_trigger.models.config import TriggerConfig
from mr_jira_trigger.models.webhook import GitLabMREvent
from mr_jira_trigger.platforms.base import GitPlatform, IssueTracker
from mr_jira_trigger.platforms.gitlab import GitLabClient
from mr_jira_trigger.platforms.jira import JiraClient
from mr_jira_trigger.trigger.engine import TriggerEngine


logger = logging.getLogger(__name__)


class IssueReport(BaseModel):
    issue_key: str
    ok: bool
    transitioned: bool
    commented: bool
    errors: list[str] = []


class WebhookResponse(BaseModel):
    status: str
    message: str | None = None
    issues: list[IssueReport] = []


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("MR Jira Trigger starting...")
    yield
    logger.info("MR Jira Trigger shutting down...")
    for client in (app.state.jira, app.state.gitlab):
        aclose = getattr(client, "aclose", None)
        if aclose is not None:
            await aclose()


async def health():
    return {"status": "ok", "version": __version__}


async def gitlab_webhook(request: Request):
    logger.info("New request is handling")
    body = await request.body()

    try:
        event = GitLabMREvent.model_validate_json(body)
    except ValidationError as e:
        logger.warning(f"Could not decode webhook payload: {e}")
        return PlainTextResponse(str(e), status_code=400)

    engine: TriggerEngine = request.app.state.engine
    try:
        result = await engine.handle(event)
    except UnsupportedStateError as e:
        logger.error(f"{e} for merge request !{event.object_attributes.iid}")
        return PlainTextResponse(str(e), status_code=422)

    return WebhookResponse(
        status=result.status,
        message=result.reason,
        issues=[
            IssueReport(
                issue_key=outcome.issue_key,
                ok=outcome.ok,
                transitioned=outcome.transitioned,
                commented=outcome.commented,
                errors=outcome.errors,
            )
            for outcome in result.outcomes
        ],
    )


def create_app(
    config: TriggerConfig,
    settings: Settings | None = None,
    jira: IssueTracker | None = None,
    gitlab: GitPlatform | None = None,
) -> FastAPI:
    """Build the app with one shared engine and one HTTP client per platform."""
    if settings is None:
        settings = Settings()
    if jira is None:
        jira = JiraClient(
            host=config.jira.host,
            username=config.jira.username,
            password=config.jira.password,
            timeout=settings.http_timeout,
        )
    if gitlab is None:
        gitlab = GitLabClient(
            token=config.gitlab.token,
            base_url=config.gitlab.host,
            timeout=settings.http_timeout,
        )

    app = FastAPI(title="MR Jira Trigger", version=__version__, lifespan=lifespan)
    app.state.jira = jira
    app.state.gitlab = gitlab
    app.state.engine = TriggerEngine(jira=jira, gitlab=gitlab, config=config, bot_name=settings.bot_name)

    app.add_api_route("/health", health, methods=["GET"])
    app.add_api_route(config.server.path, gitlab_webhook, methods=["POST"], response_model=WebhookResponse)
    return app


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mr-jira-trigger",
        description="Relay GitLab merge request events to Jira issues.",
    )
    parser.add_argument("--path", default=None, help="Setup your configuration file path.")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = Settings()

    logging.basicConfig(level=settings.log_level.upper())

    try:
        config = load_config(args.path or settings.config_path)
    except ConfigError as e:
        print(e, file=sys.stderr)
        parser.print_usage(sys.stderr)
        sys.exit(1)

    app = create_app(config, settings)
    logger.info(f"Listening on {settings.host}:{config.server.port}{config.server.path}")
    uvicorn.run(app, host=settings.host, port=config.server.port, log_level=settings.log_level.lower())


if __name__ == "__main__":
    main()

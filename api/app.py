from __future__ import annotations

import logging
import os
import secrets
from typing import Any

from fastapi import Body, Depends, FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from habitcore import (
    HabitConfig,
    HabitTrackerError,
    InvalidHabitConfig,
    aggregate_metrics,
    build_display_entries,
    configure_logging,
    habit_color,
    load_settings,
    parse_entries,
    resolve_display_range,
    save_settings,
    to_day,
    today_local,
    update_settings,
    validate_entry,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Habit Tracker Engine", version="0.1.0")

security = HTTPBasic(auto_error=False)


@app.exception_handler(HabitTrackerError)
async def habit_tracker_error_handler(request: Request, exc: HabitTrackerError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=exc.to_dict(),
    )


# ── Auth ──────────────────────────────────────────────────────


def get_current_user(credentials: HTTPBasicCredentials | None = Depends(security)) -> str:
    expected_username = os.environ.get("HABIT_TRACKER_USERNAME", "")
    expected_password = os.environ.get("HABIT_TRACKER_PASSWORD", "")

    if not expected_username or not expected_password:
        return "guest"

    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )

    correct_username = secrets.compare_digest(credentials.username.encode("utf-8"), expected_username.encode("utf-8"))
    correct_password = secrets.compare_digest(credentials.password.encode("utf-8"), expected_password.encode("utf-8"))

    if not (correct_username and correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


# ── Endpoints ─────────────────────────────────────────────────


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"ok": "true"}


@app.post("/api/habits/compute")
def api_compute(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    """Display entries + metrics for one habit.

    Body: {frontmatter, entries?, range?: {start?, end?, daysToShow?, reverse?}, today?}
    """
    settings = load_settings()
    configure_logging(settings)

    frontmatter = payload.get("frontmatter") or {}
    if not isinstance(frontmatter, dict):
        raise HTTPException(status_code=400, detail="frontmatter must be an object")
    config = HabitConfig.from_frontmatter(frontmatter, settings)
    raw_entries = payload["entries"] if "entries" in payload else frontmatter.get("entries")
    entries = parse_entries(raw_entries)

    today = to_day(payload["today"]) if payload.get("today") else today_local()
    rng = payload.get("range") or {}
    days_to_show = rng.get("daysToShow", settings.days_to_show)
    if not isinstance(days_to_show, int) or isinstance(days_to_show, bool):
        raise InvalidHabitConfig(
            f"daysToShow must be an integer, got {days_to_show!r}",
            details={"daysToShow": str(days_to_show)},
        )
    reverse = rng.get("reverse", settings.reverse_order)
    if not isinstance(reverse, bool):
        raise InvalidHabitConfig(
            f"reverse must be a boolean, got {reverse!r}",
            details={"reverse": str(reverse)},
        )
    display_range = resolve_display_range(
        today,
        days_to_show=days_to_show,
        first_displayed=rng.get("start"),
        last_displayed=rng.get("end"),
        reverse=reverse,
    )

    display = build_display_entries(entries, config, display_range, today)
    metrics = aggregate_metrics(entries, config, display_range, today)
    logger.debug("Computed %s for %s (%d entries)", config.title or "habit", username, len(entries))
    return {
        "title": config.title,
        "color": habit_color(config, settings),
        "ignore": config.ignore,
        "entries": [e.to_dict() for e in display],
        "metrics": metrics.to_dict(),
    }


@app.post("/api/habits/validate_entry")
def api_validate_entry(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    config = HabitConfig.from_frontmatter(payload.get("frontmatter") or {}, load_settings())
    entry = payload.get("entry")
    if not isinstance(entry, dict):
        return {"ok": False, "errors": ["entry must be an object"]}
    errors = validate_entry(entry, config)
    return {"ok": not errors, "errors": errors}


@app.get("/api/settings")
def api_get_settings(username: str = Depends(get_current_user)) -> dict[str, Any]:
    return {"ok": True, "settings": load_settings().to_dict()}


@app.put("/api/settings")
def api_update_settings(payload: dict[str, Any] = Body(...), username: str = Depends(get_current_user)) -> dict[str, Any]:
    settings, errors = update_settings(load_settings(), payload)
    if errors:
        return {"ok": False, "errors": errors}
    save_settings(settings)
    configure_logging(settings)
    return {"ok": True, "settings": settings.to_dict()}

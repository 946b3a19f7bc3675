import asyncio
import logging

from fastapi import FastAPI, Request, HTTPException, BackgroundTasks
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle.board import generate_grid
from boggle.settings import settings

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")

# These will be populated at startup
_dictionary = None
_round = None


class WordSubmission(BaseModel):
    word: str = ""


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _dictionary, _round

        from boggle.dictionary import load_dictionary
        from boggle.tiles import DICE_SETS, validate_dice

        for size, dice in DICE_SETS.items():
            validate_dice(dice)
            logger.info("Dice set for %dx%d validated", size, size)
        if settings.GRID_SIZE not in DICE_SETS:
            raise ValueError(f"GRID_SIZE={settings.GRID_SIZE} has no dice set, choose from {sorted(DICE_SETS)}")

        # URL fetch, file read and trie build all block
        _dictionary = await asyncio.to_thread(load_dictionary, settings)
        _round = None

        yield

    application = FastAPI(title="Boggle", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": _dictionary is not None,
            "dictionary_source": _dictionary.source if _dictionary is not None else None,
            "word_count": len(_dictionary) if _dictionary is not None else 0,
        }

    @application.post("/round")
    async def start_round():
        global _round
        from boggle.metrics import StageTimer
        from boggle.session import RoundSession
        from boggle.tiles import DICE_SETS

        if _dictionary is None:
            raise HTTPException(503, "Dictionary not loaded")

        timer = StageTimer()
        with timer.stage("generate"):
            grid = generate_grid(DICE_SETS[settings.GRID_SIZE], settings.GRID_SIZE)

        _round = RoundSession(
            grid, _dictionary.words, _dictionary.trie,
            min_length=settings.MIN_WORD_LENGTH,
            round_seconds=settings.ROUND_SECONDS,
        )
        logger.info("Round started: %r", grid)
        return JSONResponse({**_round_state(_round), "stage_timings": timer.summary()})

    @application.get("/round")
    async def get_round():
        return JSONResponse(_round_state(_current_round()))

    @application.post("/round/words")
    async def submit_word(submission: WordSubmission):
        from boggle.metrics import StageTimer
        from boggle.session import SubmissionRejected

        session = _current_round()
        timer = StageTimer()
        try:
            with timer.stage("locate"):
                accepted = session.submit(submission.word)
        except SubmissionRejected as e:
            logger.info("Rejected %r: %s", e.word, e.reason.value)
            raise HTTPException(422, {"reason": e.reason.value, "message": e.message, "word": e.word})

        return JSONResponse({
            "word": accepted.word,
            "score": accepted.score,
            "path": [list(p) for p in accepted.path],
            "total_score": session.total_score,
            "stage_timings": timer.summary(),
        })

    @application.post("/round/end")
    async def end_round(background_tasks: BackgroundTasks):
        from boggle.notifier import send_round_summary

        session = _current_round()
        first_end = not session.ended
        total = session.end()

        if first_end and settings.NTFY_TOPIC:
            result = session.challenge()
            summary = {
                "size": session.grid.size,
                "total_score": total,
                "found_count": result.found_count,
                "total_possible": result.total_possible,
                "max_score": result.max_score,
                "words": list(session.accepted),
            }
            background_tasks.add_task(send_round_summary, summary, settings.NTFY_TOPIC, settings.NTFY_URL)

        return JSONResponse({
            "total_score": total,
            "word_count": len(session.accepted),
            "words": session.accepted,
        })

    @application.get("/round/challenge")
    async def challenge():
        from boggle.metrics import StageTimer
        from boggle.session import RoundStillActive

        session = _current_round()
        timer = StageTimer()
        try:
            with timer.stage("enumerate"):
                result = session.challenge(settings.MAX_MISSED)
        except RoundStillActive as e:
            raise HTTPException(409, str(e))

        logger.info("Challenge: %d found / %d possible, max score %d",
                    result.found_count, result.total_possible, result.max_score)
        return JSONResponse({
            "found_count": result.found_count,
            "total_possible": result.total_possible,
            "max_score": result.max_score,
            "total_score": session.total_score,
            "missed": [{"word": w, "score": s} for w, s in result.missed],
            "stage_timings": timer.summary(),
        })

    @application.get("/api/settings")
    async def api_get_settings():
        from boggle.settings import get_editable_settings, EDITABLE_FIELDS
        values = get_editable_settings(settings)
        field_types = {k: v.__name__ for k, v in EDITABLE_FIELDS.items()}
        return JSONResponse({"settings": values, "field_types": field_types})

    @application.post("/api/settings")
    async def api_post_settings(request: Request):
        from boggle.settings import update_settings, get_editable_settings
        body = await request.json()
        if not isinstance(body, dict):
            raise HTTPException(400, "Expected a JSON object")
        errors = update_settings(settings, **body)
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


def _current_round():
    if _round is None:
        raise HTTPException(404, "No round has been started")
    return _round


def _round_state(session) -> dict:
    remaining = session.time_remaining
    return {
        "size": session.grid.size,
        "board": [
            [{"display": t.display, "token": t.token, "score": t.score} for t in row]
            for row in session.grid.rows()
        ],
        "active": session.active,
        "time_remaining": None if remaining == float("inf") else round(remaining, 1),
        "accepted": session.accepted,
        "total_score": session.total_score,
    }


app = create_app()

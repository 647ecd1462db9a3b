import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from boggle.errors import BoardSizeError
from boggle.settings import STRATEGIES, log_level, settings

logging.basicConfig(level=log_level(settings), format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("boggle")

# Populated at startup
_dictionary: list[str] | None = None


class SolveRequest(BaseModel):
    board: str
    words: list[str] | None = None
    strategy: str | None = None
    parallel: bool | None = None
    paths: bool = False


def create_app() -> FastAPI:
    from contextlib import asynccontextmanager

    @asynccontextmanager
    async def lifespan(application: FastAPI):
        global _dictionary

        from boggle.solver import load_dictionary
        dict_path = settings.DICTIONARY_PATH
        if dict_path.exists():
            logger.info("Loading dictionary from %s", dict_path)
            _dictionary = load_dictionary(dict_path)
            logger.info("Dictionary loaded (%d words)", len(_dictionary))
        else:
            logger.warning("No dictionary at %s, requests must supply words", dict_path)

        yield

    application = FastAPI(title="Boggle Solver", lifespan=lifespan)

    @application.get("/health")
    async def health():
        return {
            "status": "ok",
            "dictionary_loaded": _dictionary is not None,
            "dictionary_size": len(_dictionary) if _dictionary is not None else 0,
        }

    @application.post("/solve")
    def solve(body: SolveRequest):
        from boggle.grid import Grid
        from boggle.metrics import StageTimer
        from boggle.search import SearchEngine
        from boggle.solver import solve as solve_board, sort_words

        strategy = body.strategy or settings.STRATEGY
        if strategy not in STRATEGIES:
            raise HTTPException(400, f"Unknown strategy {strategy!r}, expected one of {list(STRATEGIES)}")

        words = body.words if body.words is not None else _dictionary
        if words is None:
            raise HTTPException(503, "No dictionary loaded and none supplied")
        if body.words is not None and sum(len(w) + 1 for w in body.words) > settings.MAX_UPLOAD_BYTES:
            raise HTTPException(413, f"Word list too large (max {settings.MAX_UPLOAD_BYTES} bytes)")

        timer = StageTimer()
        try:
            with timer.stage("parse_board"):
                grid = Grid.parse(body.board)
        except BoardSizeError as e:
            raise HTTPException(400, f"Bad board size: {e}")
        except ValueError as e:
            raise HTTPException(400, f"Bad board: {e}")
        if grid.size > settings.MAX_BOARD_SIZE:
            raise HTTPException(413, f"Board too large (max {settings.MAX_BOARD_SIZE} x {settings.MAX_BOARD_SIZE})")

        logger.info("Board %dx%d: %s", grid.size, grid.size, " / ".join(grid.rows()))

        result = solve_board(
            grid,
            words,
            strategy=strategy,
            parallel=settings.PARALLEL if body.parallel is None else body.parallel,
            workers=settings.MAX_WORKERS or None,
            min_word_length=settings.MIN_WORD_LENGTH,
            timer=timer,
        )

        found = sort_words(result.words, settings.MAX_RESULTS)
        logger.info("Found %d words (returning top %d)", result.count, len(found))

        response = {
            "size": grid.size,
            "board": grid.rows(),
            "words": found,
            "word_count": result.count,
            "strategy": strategy,
            "processing_time": timer.total_ms,
            "stage_timings": timer.summary(),
        }
        if body.paths:
            engine = SearchEngine(grid, settings.MIN_WORD_LENGTH)
            response["paths"] = {w: engine.word_path(w) for w in found}
        return JSONResponse(response)

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
        errors = update_settings(settings, **body)
        # DEBUG may have been toggled
        logger.setLevel(log_level(settings))
        if errors:
            return JSONResponse({"updated": get_editable_settings(settings), "errors": errors}, status_code=400)
        logger.info("Settings updated: %s", body)
        return JSONResponse({"updated": get_editable_settings(settings)})

    return application


app = create_app()

# ecorater/app.py
import logging
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware

from ecorater import config
from ecorater.errors import UpstreamError
from ecorater.extraction import extract_identity, parse_rating
from ecorater.llm_client import GenerativeClient
from ecorater.models import (
    IdentifyRequest,
    IdentifyResponse,
    ProductQuery,
    RatingResponse,
    RawResponse,
    SearchRequest,
    SearchResponse,
)
from ecorater.prompts import identify_prompt, rating_prompt, raw_prompt, search_query
from ecorater.search import ProductSearch

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config.configure_logging()
    # collaborators not injected by the caller are built once here
    if app.state.llm is None:
        app.state.llm = GenerativeClient()
    if app.state.searcher is None:
        app.state.searcher = ProductSearch()
    logger.info("model=%s search_enabled=%s", app.state.llm.model, app.state.searcher.enabled)
    yield


# ---------- dependencies ----------
def get_llm(request: Request) -> GenerativeClient:
    return request.app.state.llm


def get_searcher(request: Request) -> ProductSearch:
    return request.app.state.searcher


def get_required_fields(request: Request) -> List[str]:
    return request.app.state.required_fields


# ---------- helpers ----------
def _check_required(query: ProductQuery, required: List[str]) -> None:
    if query.missing(required):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid request: All fields ({', '.join(required)}) are required.",
        )


def _generate(llm: GenerativeClient, prompt: str, image_url: Optional[str] = None) -> str:
    try:
        return llm.generate_text(prompt, image_url=image_url)
    except UpstreamError:
        logger.exception("Error calling Gemini API")
        raise HTTPException(status_code=500, detail="Failed to call Gemini API")


def _search(searcher: ProductSearch, query: str, num: int = 10):
    try:
        return searcher.search_products(query, num=num)
    except UpstreamError:
        logger.exception("Error calling search API")
        raise HTTPException(status_code=500, detail="Failed to call search API")


# ---------- app ----------
def create_app(
    llm: Optional[GenerativeClient] = None,
    searcher: Optional[ProductSearch] = None,
    required_fields: Optional[List[str]] = None,
) -> FastAPI:
    app = FastAPI(title="Eco Rating Backend", lifespan=lifespan)
    app.state.llm = llm
    app.state.searcher = searcher
    app.state.required_fields = list(config.REQUIRED_FIELDS if required_fields is None else required_fields)

    # CORS so Streamlit (different origin) can call the API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz(request: Request):
        llm_ = request.app.state.llm
        searcher_ = request.app.state.searcher
        return {
            "status": "ok" if llm_ is not None else "starting",
            "model": getattr(llm_, "model", None),
            "search_enabled": bool(searcher_ is not None and searcher_.enabled),
            "required_fields": request.app.state.required_fields,
        }

    @app.post("/gemini-test", response_model=RawResponse)
    def gemini_test(
        query: ProductQuery,
        llm: GenerativeClient = Depends(get_llm),
        required: List[str] = Depends(get_required_fields),
    ):
        logger.debug("request body: %s", query.model_dump())
        _check_required(query, required)
        return {"response": _generate(llm, raw_prompt(query))}

    @app.post("/rate", response_model=RatingResponse)
    def rate(
        query: ProductQuery,
        llm: GenerativeClient = Depends(get_llm),
        required: List[str] = Depends(get_required_fields),
    ):
        logger.debug("request body: %s", query.model_dump())
        _check_required(query, required)
        text = _generate(llm, rating_prompt(query))
        parsed = parse_rating(text)
        return {**parsed.model_dump(), "response": text}

    @app.post("/identify", response_model=IdentifyResponse)
    def identify(
        req: IdentifyRequest,
        llm: GenerativeClient = Depends(get_llm),
        searcher: ProductSearch = Depends(get_searcher),
    ):
        if not req.has_one_image():
            raise HTTPException(status_code=400, detail="Provide exactly one of image_url or image_base64.")
        text = _generate(llm, identify_prompt(), image_url=req.as_url())
        identity = extract_identity(text)
        out = {**identity.model_dump(), "response": text}
        if req.search:
            q = search_query(identity)
            out["results"] = _search(searcher, q) if q and searcher.enabled else []
        return out

    @app.post("/search", response_model=SearchResponse)
    def search(req: SearchRequest, searcher: ProductSearch = Depends(get_searcher)):
        if not searcher.enabled:
            raise HTTPException(status_code=503, detail="Search API is not configured")
        return {"items": _search(searcher, req.query, num=req.num)}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=config.PORT)

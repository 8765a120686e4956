"""
FastAPI Application Entry Point

Reference Retrieval API
"""
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from refscout.core.config import Settings, settings
from refscout.core.dependencies import get_settings
from refscout.core.logging import setup_logging
from refscout.api.search import router as search_router

setup_logging(settings.log_level)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Multi-provider reference search with source selection and full-content enrichment",
    version="1.0.0"
)

app.include_router(search_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)


@app.get("/")
async def health_check(config: Settings = Depends(get_settings)):
    """Root endpoint to verify the server is running."""
    return {
        "status": "active",
        "project": config.PROJECT_NAME,
        "version": "1.0.0",
        "providers": {
            "bocha": config.BOCHA_API_KEY is not None,
            "onebound": config.ONEBOUND_API_KEY is not None,
        },
        "selection_model": config.llm_model,
        "endpoints": {
            "search": "/api/search",
            "connectivity": "/api/search/connectivity",
            "retrieve": "/api/retrieve"
        }
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

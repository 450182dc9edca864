from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import List, Dict, Any, Optional
import uvicorn

from archscope import __version__
from archscope.analyzer import CodebaseAnalyzer, InvalidProjectPathError, validate_project_path
from archscope.config import settings
from archscope.graph import calculate_file_importance, summarize_health
from archscope.reader import FileAccessDenied, SourceFileNotFound, read_project_file
from archscope.utils.logger import app_logger


logger = app_logger.bind(component="api_server")

app = FastAPI(title="archscope API", version=__version__)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class AnalyzeRequest(BaseModel):
    projectPath: Optional[str] = None


class ReadFileRequest(BaseModel):
    projectPath: Optional[str] = None
    filePath: Optional[str] = None


class MetricsResponse(BaseModel):
    health: Dict[str, Any]
    fileImportance: List[Dict[str, Any]]


async def _run_analysis(project_path: Optional[str]):
    try:
        analyzer = CodebaseAnalyzer(project_path)
    except InvalidProjectPathError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        return await analyzer.analyze()
    except Exception as e:
        logger.error(f"Analysis error: {e}")
        raise HTTPException(status_code=500, detail=str(e) or "Analysis failed")


@app.get("/api/health")
async def health():
    """Liveness check."""
    return {"status": "ok", "version": __version__}


@app.post("/api/analyze")
async def analyze(request: AnalyzeRequest):
    """Analyze a project directory and return the full analysis result."""
    result = await _run_analysis(request.projectPath)
    return result.to_dict()


@app.post("/api/metrics", response_model=MetricsResponse)
async def metrics(request: AnalyzeRequest):
    """Analyze a project and return structural metrics derived from it."""
    result = await _run_analysis(request.projectPath)

    importance = []
    if result.dependency_graph:
        importance = [item.to_dict() for item in calculate_file_importance(result.dependency_graph)]

    return MetricsResponse(
        health=summarize_health(result).to_dict(),
        fileImportance=importance,
    )


@app.post("/api/read-file")
async def read_file(request: ReadFileRequest):
    """Return the contents of one file inside a project."""
    if not request.projectPath or not request.filePath:
        raise HTTPException(status_code=400, detail="filePath and projectPath are required")

    try:
        project_root = validate_project_path(request.projectPath)
        source = read_project_file(str(project_root), request.filePath)
        return source.to_dict()
    except InvalidProjectPathError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except FileAccessDenied as e:
        raise HTTPException(status_code=403, detail=str(e))
    except SourceFileNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except OSError as e:
        logger.error(f"Error reading file: {e}")
        raise HTTPException(status_code=500, detail="Failed to read file")


if __name__ == "__main__":
    logger.info("Starting archscope API server")

    uvicorn.run(
        "api_server:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )

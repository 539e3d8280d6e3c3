from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from transkit.codec import components_from_json, node_from_json, node_to_json
from transkit.config.options import get_defaults
from transkit.diagnostics import Diagnostics
from transkit.errors import TranskitError
from transkit.logger import get_logger
from transkit.reconciler import render_nodes
from transkit.render import render_to_markup
from transkit.serializer import nodes_to_string
from transkit.validator import check_translation

logger = get_logger(__name__)

app = FastAPI(title="transkit")

# Allow CORS for dev
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class DiagnosticOut(BaseModel):
    code: str
    message: str


class SerializeRequest(BaseModel):
    children: Any = None
    options: Dict[str, Any] = Field(default_factory=dict)


class SerializeResponse(BaseModel):
    key: str
    diagnostics: List[DiagnosticOut] = Field(default_factory=list)


class RenderRequest(BaseModel):
    children: Any = None
    components: Any = None
    translation: str
    values: Dict[str, Any] = Field(default_factory=dict)
    language: Optional[str] = "en"
    should_unescape: bool = False
    options: Dict[str, Any] = Field(default_factory=dict)


class RenderResponse(BaseModel):
    nodes: List[Any]
    html: str
    diagnostics: List[DiagnosticOut] = Field(default_factory=list)


class CheckRequest(BaseModel):
    source: str
    target: str


def _diagnostics_out(diagnostics: Diagnostics) -> List[DiagnosticOut]:
    return [DiagnosticOut(code=d.code, message=d.message) for d in diagnostics.items]


@app.post("/api/serialize", response_model=SerializeResponse)
async def serialize(req: SerializeRequest):
    diagnostics = Diagnostics()
    try:
        options = get_defaults().merged(req.options)
        children = node_from_json(req.children)
        key = nodes_to_string(children, options, diagnostics)
    except TranskitError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return SerializeResponse(key=key, diagnostics=_diagnostics_out(diagnostics))


@app.post("/api/render", response_model=RenderResponse)
async def render(req: RenderRequest):
    diagnostics = Diagnostics()
    try:
        options = get_defaults().merged(req.options)
        children = node_from_json(req.children)
        components = components_from_json(req.components)
        nodes = render_nodes(
            components or children,
            req.translation,
            values=req.values,
            language=req.language,
            options=options,
            should_unescape=req.should_unescape,
            diagnostics=diagnostics,
        )
    except TranskitError as e:
        raise HTTPException(status_code=400, detail=str(e))

    logger.info(f"Rendered translation into {len(nodes)} node(s)")
    return RenderResponse(
        nodes=node_to_json(nodes),
        html=render_to_markup(nodes),
        diagnostics=_diagnostics_out(diagnostics),
    )


@app.post("/api/check")
async def check(req: CheckRequest):
    result = check_translation(req.source, req.target)
    return {
        "status": result.status,
        "tag_stats": result.tag_stats,
        "issues": [{"type": i.type, "severity": i.severity, "message": i.message} for i in result.issues],
        "qa_details": result.qa_details,
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

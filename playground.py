"""
ldaclint playground — Interactive web UI for checking crates against the profile.

Run with: uv run python playground.py
"""

from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from pydantic import BaseModel

from ldaclint.crate import Crate
from ldaclint.engine import validate_profile
from ldaclint.report import ConformanceReport

app = FastAPI()
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")

EXAMPLE_CRATE = """\
{
  "@context": {
    "@vocab": "http://schema.org/",
    "ldac": "http://purl.archive.org/language-data-commons/terms#",
    "hasMember": "http://pcdm.org/models#hasMember",
    "conformsTo": "http://purl.org/dc/terms/conformsTo",
    "RepositoryCollection": "http://pcdm.org/models#Collection"
  },
  "@graph": [
    {
      "@id": "ro-crate-metadata.json",
      "@type": "CreativeWork",
      "about": {"@id": "./"}
    },
    {
      "@id": "./",
      "@type": ["Dataset", "RepositoryCollection"],
      "name": "Example collection",
      "description": "A collection of recordings",
      "conformsTo": {"@id": "https://purl.archive.org/language-data-commons/profile#Collection"},
      "datePublished": "2024",
      "publisher": {"@id": "https://ror.org/00rqy9422"},
      "license": {"@id": "LICENSE.txt"}
    },
    {
      "@id": "LICENSE.txt",
      "@type": ["File", "DataReuseLicense"],
      "name": "Licence",
      "URL": "https://creativecommons.org/licenses/by/4.0/"
    }
  ]
}
"""


class ValidateRequest(BaseModel):
    crate: str = ""
    show_info: bool = False


@app.post("/api/validate")
def validate_crate(req: ValidateRequest):
    try:
        crate = Crate.from_jsonld(req.crate or EXAMPLE_CRATE, source="<playground>")
        root = crate.root
        findings = validate_profile(root if root is not None else "./", crate)
        report = ConformanceReport.from_findings(findings, source=crate.source)
        return {
            "ok": True,
            "report": report.to_dict(),
            "table": report.print_table(show_info=req.show_info),
        }
    except Exception as e:
        return {"ok": False, "error": f"{type(e).__name__}: {e}"}


@app.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(
        request,
        "playground.html",
        {"example_crate": EXAMPLE_CRATE},
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8420)

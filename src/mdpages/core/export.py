"""Export: write rendered pages and sidecar JSON mirroring the source layout"""

import json
from pathlib import Path

from mdpages.core.models import META_FIELDS, Document


def build_sidecar(doc: Document) -> dict:
    """Build the sidecar JSON dict: listing metadata plus the document map (ISO dates)."""
    data = doc.to_meta().model_dump(mode='json', include={'path', *META_FIELDS})
    data['section'] = doc.section
    data['document_map'] = doc.document_map.model_dump(mode='json') if doc.document_map else None
    return data


def write_doc(doc: Document, output_dir: Path) -> tuple[Path, Path]:
    """Write HTML + sidecar JSON for a single document.

    Output path mirrors the source directory structure:
      output_dir / Path(doc.path).parent / doc.slug.{html|json}

    The full page is written when rendered, else the preview fragment.
    Returns (html_path, json_path).
    """
    dest_dir = Path(output_dir) / Path(doc.path).parent
    dest_dir.mkdir(parents=True, exist_ok=True)

    html_path = dest_dir / f"{doc.slug}.html"
    json_path = dest_dir / f"{doc.slug}.json"

    html_path.write_text(doc.html_page or doc.preview or '', encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(doc), indent=2), encoding='utf-8')
    return html_path, json_path

"""Schema Routes.

Resolves internal $ref pointers in JSON schema / OpenAPI documents.
"""

import json
import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, HTTPException
from fastapi.responses import Response

from schema_deref import SchemaReferenceError, dereference

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/dereference")
async def dereference_schema(document: Dict[str, Any] = Body(...)) -> Response:
    """
    Return the document with every internal $ref replaced by its target.

    Responds 422 for external or broken refs, and for self-referencing
    schemas, which can't be represented as JSON once dereferenced.
    """
    try:
        resolved = dereference(document)
    except SchemaReferenceError as e:
        logger.warning(f"Schema dereference failed: {e}")
        raise HTTPException(status_code=422, detail=str(e))

    try:
        content = json.dumps(resolved)
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail="Schema is self-referencing and can't be fully dereferenced",
        )
    return Response(content=content, media_type="application/json")

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import urlencode

from .. import config

CDN_BASE = "https://cdn.sanity.io/images"

# image-<asset id>-<width>x<height>-<format>
_ASSET_REF = re.compile(r"^image-(?P<id>[A-Za-z0-9]+)-(?P<dims>\d+x\d+)-(?P<fmt>[a-z0-9]+)$")


def image_url(
    ref: Optional[str],
    width: Optional[int] = None,
    height: Optional[int] = None,
    *,
    project_id: Optional[str] = None,
    dataset: Optional[str] = None,
) -> Optional[str]:
    """Resolve an image reference to a displayable URL.

    Asset references are turned into CDN URLs sized with ``w``/``h``; absolute
    URLs are returned unchanged. Unrecognised references resolve to ``None``.
    """
    if not ref:
        return None
    if ref.startswith(("http://", "https://")):
        return ref

    match = _ASSET_REF.match(ref)
    project_id = project_id or config.SANITY_PROJECT_ID
    if not match or not project_id:
        logging.warning("Unable to resolve image reference: %s", ref)
        return None

    dataset = dataset or config.SANITY_DATASET
    url = f"{CDN_BASE}/{project_id}/{dataset}/{match['id']}-{match['dims']}.{match['fmt']}"
    query = {}
    if width:
        query["w"] = width
    if height:
        query["h"] = height
    return f"{url}?{urlencode(query)}" if query else url

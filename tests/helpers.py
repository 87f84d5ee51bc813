"""In-process fake registry for tests."""

import asyncio
import hashlib
import json
from dataclasses import dataclass, field

from aiohttp import web

MANIFEST_V2 = "application/vnd.docker.distribution.manifest.v2+json"
IMAGE_CONFIG_V1 = "application/vnd.docker.container.image.v1+json"


def make_blob(
    architecture: str = "amd64",
    created: str = "2024-01-15T10:30:45.123456789Z",
    **config,
) -> dict:
    """Build an image config blob with the given nested config fields."""
    return {
        "architecture": architecture,
        "os": "linux",
        "created": created,
        "config": config,
        "rootfs": {"type": "layers", "diff_ids": []},
    }


NGINX_BLOB = make_blob(
    User="nginx",
    Env=["PATH=/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin", "NGINX_VERSION=1.25.3"],
    Cmd=["nginx", "-g", "daemon off;"],
    WorkingDir="/usr/share/nginx/html",
    Labels={"maintainer": "NGINX Docker Maintainers"},
)


@dataclass
class RecordedRequest:
    method: str
    path: str
    headers: dict[str, str]


@dataclass
class FakeRegistry:
    """Minimal Docker Registry v2 serving catalog, tags, manifests and blobs.

    Repositories are served in insertion order. Every request is recorded.
    """

    tags: dict[str, dict[str, str]] = field(default_factory=dict)
    blobs: dict[str, bytes] = field(default_factory=dict)
    requests: list[RecordedRequest] = field(default_factory=list)
    page_size: int | None = None
    catalog_body: bytes | None = None
    catalog_link: str | None = None
    null_tags: set[str] = field(default_factory=set)
    delay: float = 0

    def add_blob(self, blob: dict | bytes) -> str:
        """Store a config blob and return its digest."""
        body = blob if isinstance(blob, bytes) else json.dumps(blob).encode("utf-8")
        digest = f"sha256:{hashlib.sha256(body).hexdigest()}"
        self.blobs[digest] = body
        return digest

    def add_image(self, name: str, tag: str, blob: dict | bytes = NGINX_BLOB) -> str:
        """Tag a config blob in a repository and return the blob digest."""
        digest = self.add_blob(blob)
        self.tags.setdefault(name, {})[tag] = digest
        return digest

    def paths(self) -> list[str]:
        return [request.path for request in self.requests]

    def make_app(self) -> web.Application:
        @web.middleware
        async def record(request: web.Request, handler):
            self.requests.append(
                RecordedRequest(request.method, request.path, dict(request.headers))
            )
            if self.delay:
                await asyncio.sleep(self.delay)
            return await handler(request)

        app = web.Application(middlewares=[record])
        app.router.add_get("/v2/", self._base)
        app.router.add_get("/v2/_catalog", self._catalog)
        app.router.add_get("/v2/{name:.+}/tags/list", self._tag_list)
        app.router.add_get("/v2/{name:.+}/manifests/{reference}", self._manifest)
        app.router.add_get("/v2/{name:.+}/blobs/{digest}", self._blob)
        return app

    @staticmethod
    def _error(code: str, message: str) -> web.Response:
        return web.json_response(
            {"errors": [{"code": code, "message": message}]}, status=404
        )

    async def _base(self, request: web.Request) -> web.Response:
        return web.json_response({})

    async def _catalog(self, request: web.Request) -> web.Response:
        if self.catalog_body is not None:
            headers = {"Link": self.catalog_link} if self.catalog_link else None
            return web.Response(
                body=self.catalog_body, content_type="application/json", headers=headers
            )

        names = list(self.tags)
        if self.page_size is None:
            return web.json_response({"repositories": names})

        last = request.query.get("last")
        start = names.index(last) + 1 if last else 0
        page = names[start : start + self.page_size]
        headers = {}
        if start + self.page_size < len(names):
            headers["Link"] = (
                f'</v2/_catalog?last={page[-1]}&n={self.page_size}>; rel="next"'
            )
        return web.json_response({"repositories": page}, headers=headers)

    async def _tag_list(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        if name not in self.tags:
            return self._error("NAME_UNKNOWN", "repository name not known to registry")
        tags = None if name in self.null_tags else list(self.tags[name])
        return web.json_response({"name": name, "tags": tags})

    async def _manifest(self, request: web.Request) -> web.Response:
        name = request.match_info["name"]
        reference = request.match_info["reference"]
        digest = self.tags.get(name, {}).get(reference)
        if digest is None:
            return self._error("MANIFEST_UNKNOWN", "manifest unknown")
        manifest = {
            "schemaVersion": 2,
            "mediaType": MANIFEST_V2,
            "config": {
                "mediaType": IMAGE_CONFIG_V1,
                "size": len(self.blobs.get(digest, b"")),
                "digest": digest,
            },
            "layers": [],
        }
        return web.Response(body=json.dumps(manifest).encode("utf-8"), content_type=MANIFEST_V2)

    async def _blob(self, request: web.Request) -> web.Response:
        digest = request.match_info["digest"]
        if digest not in self.blobs:
            return self._error("BLOB_UNKNOWN", "blob unknown to registry")
        return web.Response(body=self.blobs[digest], content_type="application/octet-stream")

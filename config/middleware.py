from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin

SWAGGER_CDN = "https://cdn.jsdelivr.net"
# Swagger UI injects one small inline <style> block; allowed on /docs/ by hash only.
DOCS_STYLE_HASH = "'sha256-RL3ie0nH+Lzz2YNqQN83mnU0J1ot4QL7b99vMdIX99w=' 'unsafe-hashes'"


class ContentSecurityPolicyMiddleware(MiddlewareMixin):
    """Add a strict Content-Security-Policy header to every response.

    No inline scripts or styles; the chat and stats pages load their
    WebSocket clients from static files. Uploaded OD documents are
    served same-origin, so `img-src` needs no third-party hosts.
    """

    def process_response(self, request, response):  # noqa: D401
        script_src = style_src = "'self'"
        if request.path == "/docs/":
            script_src = f"'self' {SWAGGER_CDN}"
            style_src = f"'self' {SWAGGER_CDN} {DOCS_STYLE_HASH}"
        response["Content-Security-Policy"] = (
            "default-src 'self'; "
            "img-src 'self' data:; "
            f"script-src {script_src}; "
            f"style-src {style_src}; "
            "connect-src 'self' ws: wss:; "
            "object-src 'none'; "
            "base-uri 'self'; "
            "form-action 'self'; "
            "frame-ancestors 'none'"
        )
        return response

"""Bridge between a prepared request context and ``httpx``.

Nothing here sends a request. :func:`build_request` turns a context into an
``httpx.Request`` for the caller's client, and :func:`apply_response` merges
the provider's answer back into the context::

    ctx.request("request_token")
    async with httpx.AsyncClient() as client:
        response = await client.send(build_request(ctx))
    apply_response(ctx, response)
"""

from typing import Any, Optional

import httpx

from oauth_all.domains.oauth.encoding import normalize_parameters, parse_post_body
from oauth_all.domains.oauth.exceptions import MalformedResponseError, ProviderResponseError
from oauth_all.domains.oauth.request_context import RequestContext

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def build_request(ctx: RequestContext, realm: Optional[str] = None) -> httpx.Request:
    """Build the HTTP request for the context's current request type.

    Authorization requests become a GET on the redirect URL. Otherwise OAuth
    1.x parameters and 2.0 bearer tokens travel in the ``Authorization``
    header, with the extra parameters in the query (GET) or a form body.
    Other 2.0 requests put their parameters in the query (GET) or in a form
    body with the extra parameters in the query.

    Raises:
        OAuthConfigurationError: If the request type has no URL.
        MissingParameterError: For a 2.0 protected resource without an access token.
    """
    if ctx.request_type == "authorization":
        # User-facing redirect: everything rides in the query string.
        return httpx.Request("GET", ctx.to_url())

    method = ctx.request_method.upper()
    headers: dict[str, str] = {}

    if ctx.version.is_oauth1 or ctx.request_type == "protected_resource":
        headers["Authorization"] = ctx.to_header(realm)
        if method == "GET":
            return httpx.Request(method, ctx.to_url(extra_only=True), headers=headers)
        headers["Content-Type"] = FORM_CONTENT_TYPE
        body = normalize_parameters(ctx.parameters(extra_only=True))
        return httpx.Request(method, ctx.normalized_request_url, headers=headers, content=body)

    if method == "GET":
        return httpx.Request(method, ctx.to_url(), headers=headers)
    headers["Content-Type"] = FORM_CONTENT_TYPE
    return httpx.Request(
        method, ctx.to_url(extra_only=True), headers=headers, content=ctx.to_post_body()
    )


def apply_response(ctx: RequestContext, response: httpx.Response) -> RequestContext:
    """Merge the tokens from a provider response into the context.

    JSON bodies must be objects; anything else is parsed as a
    ``name=value&...`` parameter string. The body is parsed before the old
    token pair is dropped, so a failed parse leaves the context untouched.

    Raises:
        ProviderResponseError: If the response status is not 2xx.
        MalformedResponseError: If the body is not a JSON object or a parameter string.
    """
    if not response.is_success:
        ctx.logger.error(f"Provider answered {ctx.request_type} with HTTP {response.status_code}")
        raise ProviderResponseError(response.status_code, response.text)

    values = _parse_response_body(response)
    ctx.response().from_hash(values)

    ctx.logger.info(f"Applied provider response to {ctx.request_type} request")
    return ctx


def _parse_response_body(response: httpx.Response) -> dict[str, Any]:
    if "json" not in response.headers.get("content-type", ""):
        return parse_post_body(response.text.strip())

    try:
        payload = response.json()
    except ValueError as e:
        raise MalformedResponseError(response.text) from e
    if not isinstance(payload, dict):
        raise MalformedResponseError(response.text)
    return payload

from __future__ import annotations

import logging

LOGGER = logging.getLogger("linkedin_auth")
APP_VERSION = "0.1.0"

LINKEDIN_AUTHORIZE_URL = "https://www.linkedin.com/oauth/v2/authorization"
LINKEDIN_TOKEN_URL = "https://www.linkedin.com/oauth/v2/accessToken"

# Characters left unescaped when the whole authorization query is encoded.
URL_QUERY_ALLOWED = "!$&'()*+,-./:;=?@_~"

DEFAULT_STATE = "code"
DEFAULT_SCOPES = "r_liteprofile r_emailaddress"
USER_DECLINED_MESSAGE = "User did not authorize LinkedIn"

"""
API Models for request/response validation and Swagger documentation
"""

from flask_restx import Model, fields

# =============================================================================
# Request Models
# =============================================================================

link_request = Model(
    "LinkRequest",
    {
        "file_path": fields.String(
            required=True,
            description="Path relative to the download root",
            example="reports/q1.pdf",
        ),
        "timestamp": fields.Integer(
            required=False,
            description="Unix time to sign (defaults to now)",
            min=0,
        ),
    },
)

# =============================================================================
# Response Models
# =============================================================================

signed_link_response = Model(
    "SignedLink",
    {
        "url": fields.String(description="Signed download URL"),
        "file_path": fields.String(description="Canonical file path that was signed"),
        "signature": fields.String(description="Hex signature"),
        "timestamp": fields.String(description="Signed Unix time in hex"),
        "expires_at": fields.String(description="ISO 8601 end of the validity window"),
        "expires_in": fields.Integer(description="Seconds until the link expires"),
    },
)

error_response = Model(
    "ErrorResponse",
    {
        "error": fields.String(description="Error category"),
        "title": fields.String(description="Short error title"),
        "message": fields.String(description="User-facing error message"),
        "action": fields.String(description="Suggested next step"),
    },
)

"""File Content — decode base64 payloads returned by the GitHub/GitLab file endpoints."""

import base64


def with_decoded_content(data: object) -> object:
    """Add `decoded_content` when data is a base64-encoded UTF-8 text file.

    Directory listings, binary files and anything else pass through unchanged.
    """
    if not isinstance(data, dict):
        return data
    if data.get("encoding") != "base64" or not data.get("content"):
        return data
    try:
        text = base64.b64decode(data["content"]).decode("utf-8")
    except (ValueError, UnicodeDecodeError):
        return data
    return {**data, "decoded_content": text}

"""Root conftest — shared test configuration."""

import os

# Ensure tests don't accidentally call real GitHub/GitLab APIs
os.environ["GITHUB_TOKEN"] = ""
os.environ["GITLAB_TOKEN"] = ""
os.environ.setdefault("LOG_FORMAT", "text")

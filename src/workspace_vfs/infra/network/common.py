from __future__ import annotations

from workspace_vfs.domain.constants import APP_NAME, CURRENT_CONFIG_VERSION

USER_AGENT = f"{APP_NAME}-Client/{CURRENT_CONFIG_VERSION}"

"""Fixed names inside an Ubuntu kernel packaging tree."""

from __future__ import annotations

DEBIAN_ENV = "debian/debian.env"
DEBIAN_ENV_KEY = "DEBIAN"

UPDATE_CONF = "etc/update.conf"
COPY_FILES_HELPER = "scripts/helpers/copy-files"
COMMIT_TEMPLATE = "commit-templates/newrelease"
ABI_DIR = "abi"
CONFIG_DIR = "config"
CHANGELOG = "changelog"

# debian/rules is always the top-level one, whatever DEBIAN points at.
RULES = "debian/rules"

UNRELEASED = "UNRELEASED"

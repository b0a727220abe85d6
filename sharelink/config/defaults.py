# Sharelink Default Configuration
# Default configuration as Python dict and YAML generator

from typing import Any

import yaml

DEFAULT_CONFIG: dict[str, Any] = {
    "account": {
        "id": None,
        "home": None,
    },
    "metadata": {
        "path": "~/.config/sharelink/metadata.yaml",
    },
    "marker": ".stfs",
    "output": {
        "verbose": False,
        "colored": True,
        "log_file": None,
    },
}


def generate_default_config() -> str:
    """
    Generate the default configuration file with comments.

    Returns:
        YAML string.
    """
    header = """# Sharelink Configuration
# Location: ~/.config/sharelink/config.yaml (override with SHARELINK_CONFIG)
#
# account.id and account.home may also be supplied through the
# SHARELINK_ACCOUNT and SHARELINK_HOME environment variables.
#
# metadata.path points to a YAML file of the form:
#
#   applications:
#     projects:
#       notes: |
#         Team project space
#         share=/srv/shares/projects
#   subscriptions:
#     - account: alice
#       folder: /projects
#       application: projects

"""
    body = yaml.dump(DEFAULT_CONFIG, default_flow_style=False, sort_keys=False, allow_unicode=True)
    return header + body

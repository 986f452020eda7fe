"""Constants used throughout Docker Bootstrap."""


# Baseline host configuration
DEFAULT_EXTRA_PACKAGES = ["vim"]
DEFAULT_COMPOSE_REPO_URL = "https://github.com/scheric1/docker-startup"
DEFAULT_COMPOSE_CLONE_DIR = "/opt/docker-stacks"
DEFAULT_COMPOSE_SUBDIR = "docker"

# Docker engine
DOCKER_BINARY = "docker"
DOCKER_SERVICE_UNIT = "docker"
COMPOSE_PLUGIN_PACKAGE = "docker-compose-plugin"
DOCKER_SOCKET = "/var/run/docker.sock"

# Service account
DEFAULT_SERVICE_USER = "docker"
DEFAULT_SERVICE_GROUP = "docker"
NOLOGIN_SHELL = "/usr/sbin/nologin"
SMOKE_TEST_SHELL = "/bin/sh"
DEFAULT_SMOKE_TEST_IMAGE = "hello-world"

# Compose stack discovery
COMPOSE_FILE_PATTERNS = ("*.yml", "*.yaml")

# Deployment modes
DEPLOY_MODE_COMPOSE = "compose"
DEPLOY_MODE_PORTAINER = "portainer"
DEPLOY_MODES = (DEPLOY_MODE_COMPOSE, DEPLOY_MODE_PORTAINER)

# Portainer
PORTAINER_IMAGE = "portainer/portainer-ce"
PORTAINER_CONTAINER_NAME = "portainer"
PORTAINER_VOLUME_NAME = "portainer_data"
PORTAINER_DATA_PATH = "/data"
PORTAINER_INTERNAL_UI_PORT = 9443
PORTAINER_INTERNAL_AGENT_PORT = 8000
DEFAULT_PORTAINER_UI_PORT = 9443
DEFAULT_PORTAINER_AGENT_PORT = 8000
DEFAULT_PORTAINER_ADMIN_USER = "admin"
DEFAULT_PORTAINER_ENDPOINT_ID = 1

# Portainer stack types: 1 = swarm, 2 = standalone compose
PORTAINER_STACK_TYPE_COMPOSE = 2

# Timeout values
STATUS_POLL_INTERVAL = 2.0  # seconds between readiness probes
STATUS_TIMEOUT = 300  # 5 minutes
HTTP_TIMEOUT = 30.0

# Files
ENV_FILE_NAME = ".env"

from os import getenv


# Separator between the handler keyspace and an option path, used to build
# annotation keys such as `sensu.io/plugins/my-handler/config/timeout`
ANNOTATION_SEPARATOR = '/'

# Minimum level for library logs written to stderr
LOG_LEVEL = getenv('SENSU_HANDLER_LOG_LEVEL')

# Log output: `json` (one object per line) or `plain`
LOG_FORMAT = getenv('SENSU_HANDLER_LOG_FORMAT')

# Largest value accepted for an unsigned 64-bit option
MAX_UINT64 = 2 ** 64 - 1

# Exit status for a failed handler run (click uses 2 for usage errors)
EXIT_FAILURE = 1

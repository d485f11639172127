"""
System Parameters
=================
Logger names, diagnostic formats and defaults for the command-line host.
"""

# =============================================================================
# LOGGER NAMES
# =============================================================================

LOGGER_HOST = 'reach_ik_solver'
"""Logger for the command-line host"""

# =============================================================================
# DIAGNOSTICS
# =============================================================================

ERROR_MESSAGE_FORMAT = 'Script exception: {0}'
"""Format of the message a session records when an invocation fails"""

LOG_FORMAT = '[%(levelname)s] [%(name)s]: %(message)s'
"""Format handed to logging.basicConfig by the host"""

# =============================================================================
# HOST TARGET PATH
# =============================================================================

TARGET_RADIUS = 2.0
"""Circle radius of the generated target path"""

TARGET_CENTER = (0.0, 0.0, 1.5)
"""Center of the generated target path"""

TARGET_PERIOD = 10.0
"""Time for one full circle (seconds)"""

PUBLISH_RATE = 50.0
"""Target update rate in Hz"""

STEPS = 100
"""Number of invocations the host runs before exiting"""

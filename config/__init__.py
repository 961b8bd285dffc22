# config package — authoritative source for assessment configuration.
#
# Sub-modules:
#   api_config.py    — API endpoint, authentication, retry settings loader

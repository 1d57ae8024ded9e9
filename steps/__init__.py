# Spanish step vocabulary for the login and checkout journeys
# Registered through pytest_plugins in the root conftest

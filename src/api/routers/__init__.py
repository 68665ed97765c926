# This file marks the routers package for the film, actor, and health route groups.
# Routers parse and validate input, call one usecase method, and wrap the result in an envelope.

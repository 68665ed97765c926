# This file marks the schemas package for film, actor, health, and envelope models.
# Pydantic field constraints in these modules are where request payloads get rejected.

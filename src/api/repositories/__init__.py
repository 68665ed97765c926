# This file marks the repositories package for catalog data-access modules.
# Repositories own every SQL statement the API issues against the film library store.
# They translate missing rows into NotFoundError and leave HTTP concerns to the routers.

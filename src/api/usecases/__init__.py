# This file marks the usecases package that sits between routers and repositories.
# Usecases delegate each call to exactly one repository method and pass results through unchanged.

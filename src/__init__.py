"""
Package marker for the film library source tree.
`src.api` holds the HTTP service and its data access; `src.common` holds settings and logging shared with scripts.
"""

"""
Server services.

- deps: database session and authenticated caller dependencies
- ownership: row ownership checks
- generation: synthetic diary generation backed by the repositories
"""

"""HACCP Journal.

Record-keeping backend for Bulgarian food-service businesses: establishments,
personnel health books, refrigeration temperature diaries, cleaning logs and
food diaries, kept in the shape required by HACCP inspections.

High-level architecture
-----------------------

- ``haccp_journal.core``:

  - ``eik``: Bulgarian company identifier (EIK) checksum validation.
  - ``readings``: synthetic temperature generation used to backfill diaries.
  - ``security``: password hashing and JWT access tokens.
  - ``database``: SQLModel entities, async session management and repositories.
  - ``models``: domain enums and the I/O schemas of the REST API.

- ``haccp_journal.server``:

  - A FastAPI application exposing the REST API under ``/api/v1``.

Typical workflow
----------------

1. An owner registers (user + business) and waits for an admin to activate
   the account.
2. The owner logs in, registers establishments (EIK verified) and personnel.
3. Each registered diary device gets 15 days of plausible readings at 10:00
   and 17:00; later days are filled through the generate endpoints or the
   externally triggered cron endpoint.
"""

__version__ = "0.1.0"

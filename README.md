# productapi

A small JSON HTTP API built on Flask. Users register, log in to receive an
HS256-signed token valid for 72 hours, and then manage their own list of
products. Records are kept in a SQL database through SQLAlchemy.

## Installing

    pip install .

The service connects to MySQL through the `mysql+pymysql` dialect, so the
PyMySQL driver has to be installed alongside it:

    pip install pymysql

To run the tests as well:

    pip install ".[test]"
    pytest

## Configuration

Settings come from the environment. The `productapi` command loads a `.env`
file from the working directory at start-up and refuses to start without it
("Error loading .env file").

| Variable      | Meaning                                  |
|---------------|------------------------------------------|
| `LOCALHOST`   | Address to listen on                     |
| `APP_PORT`    | Port to listen on                        |
| `DB_USERNAME` | Database user                            |
| `DB_PASSWORD` | Database password                        |
| `DB_HOST`     | Database host                            |
| `DB_PORT`     | Database port                            |
| `DB_DATABASE` | Database name                            |
| `JWT_SECRET`  | Key used to sign and check tokens        |

An example `.env`:

    LOCALHOST=127.0.0.1
    APP_PORT=8080
    DB_USERNAME=user
    DB_PASSWORD=password
    DB_HOST=localhost
    DB_PORT=3306
    DB_DATABASE=products
    JWT_SECRET=secret

The `user` and `product` tables are created when the service starts if they
do not exist yet.

## Running

    productapi

## Endpoints

| Method   | Path                    | Auth   | Purpose                           |
|----------|-------------------------|--------|-----------------------------------|
| `GET`    | `/`                     | none   | Banner text                       |
| `POST`   | `/user/register`        | none   | Create a user                     |
| `POST`   | `/user/login`           | none   | Get a token valid for 72 hours    |
| `POST`   | `/product`              | Bearer | Add a product for the caller      |
| `GET`    | `/product`              | Bearer | List the caller's products        |
| `PATCH`  | `/product/<product_id>` | Bearer | Change a product (admin only)     |
| `DELETE` | `/product/<product_id>` | Bearer | Delete a product (admin only)     |

Protected routes expect a header of the form `Authorization: Bearer token`.
A missing or bad token is answered with status 401 and a `message`.
Successful responses share one shape:

    {"status": 200, "message": "...", "data": ...}

Registering takes `username`, `password`, `email` and `role`; passwords are
stored as bcrypt hashes. Logging in takes `username` and `password` and
returns the user's details with a `token`. Products carry `product_name`,
`total` and `price`, and always belong to the user named in the token.

Changing and deleting act only on products owned by the caller, and only when
the token's role is `admin`; other roles get a refusal. A change writes only
the fields that are present and non-empty in the request. Deleting a product
that does not exist is answered with "No Data Found".

## Using it from Python

`productapi.app.create_app(session_factory, secret)` builds the Flask
application around any SQLAlchemy session factory. When no factory is given
it calls `productapi.database.init_db()`, which connects using the URL built
by `productapi.database.database_url()` from the `DB_*` settings. `init_db`
also accepts any SQLAlchemy URL, which is handy for a local SQLite file:

    from productapi.app import create_app
    from productapi.database import init_db

    app = create_app(init_db("sqlite:///products.db"), secret="secret")
    client = app.test_client()

When `secret` is left out, tokens are signed and checked with `JWT_SECRET`.
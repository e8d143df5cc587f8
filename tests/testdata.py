from shop.auth import create_access_token

ALICE = "alice@example.com"
BOB = "bob@example.com"


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': email})}"}

import os
import bcrypt

BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

class Hash():
    def bcrypt(password: str):
        if not password or len(password.strip()) == 0:
            raise ValueError("Password cannot be empty")
        pwd_bytes = password.encode('utf-8')
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        hashed_password = bcrypt.hashpw(password=pwd_bytes, salt=salt)
        return hashed_password.decode('utf-8')

    async def verify(hashed_password, plain_password):
        if not hashed_password or not plain_password:
            return False

        if isinstance(plain_password, str):
            plain_password = plain_password.encode('utf-8')

        if isinstance(hashed_password, str):
            hashed_password = hashed_password.encode('utf-8')

        try:
            return bcrypt.checkpw(plain_password, hashed_password)
        except ValueError:
            return False  # malformed hash

"""
SQL statements for the users table
"""

CREATE_USERS_TABLE = """
    CREATE TABLE IF NOT EXISTS users (
        uuid VARCHAR(36) PRIMARY KEY,
        fullname VARCHAR(255) NOT NULL,
        study_level VARCHAR(255) NOT NULL,
        age INT NOT NULL
    )
"""

PING = "SELECT 1"

# No ORDER BY: rows come back in storage order
SELECT_ALL_USERS = "SELECT uuid, fullname, study_level, age FROM users"

SELECT_USER_BY_UUID = "SELECT uuid, fullname, study_level, age FROM users WHERE uuid = $1"

INSERT_USER = "INSERT INTO users (uuid, fullname, study_level, age) VALUES ($1, $2, $3, $4)"

UPDATE_USER = "UPDATE users SET fullname = $1, study_level = $2, age = $3 WHERE uuid = $4"

DELETE_USER = "DELETE FROM users WHERE uuid = $1"

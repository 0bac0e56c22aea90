# widest value an SQLite INTEGER column holds
MAX_INT64 = 2 ** 63 - 1

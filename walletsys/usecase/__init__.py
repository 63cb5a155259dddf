"""Use cases for user registration, balances and transaction rankings."""
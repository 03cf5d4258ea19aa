from tda_python_client import AccessToken, TDAClient
from tda_python_client.params import AccountField, GetAccountsParams
from tda_python_client.responses import CashAccount, MarginAccount
import os

if __name__ == "__main__":
    # Credentials are the caller's responsibility.
    client = TDAClient(
        os.environ["TDA_CLIENT_ID"],
        os.environ["TDA_REFRESH_TOKEN"],
    )

    # Exchange the refresh token and store the converted token.
    response = client.get_access_token()
    client.set_access_token(AccessToken.from_refresh_response(response))

    accounts = client.get_accounts(
        GetAccountsParams(fields=[AccountField.POSITIONS])
    )

    for account in accounts:
        sa = account.securities_account
        if isinstance(sa, MarginAccount):
            print(sa.account_id, "margin, buying power:",
                  sa.current_balances.buying_power)
        elif isinstance(sa, CashAccount):
            print(sa.account_id, "cash, available:",
                  sa.current_balances.cash_available_for_trading)

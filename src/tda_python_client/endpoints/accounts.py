from typing import List, Optional
import requests

from ..base_client import BaseAPIClient
from ..params import GetAccountParams, GetAccountsParams, GetOrdersParams
from ..responses import Account, Order, decode_list


class AccountsAPI(BaseAPIClient):
    """
    Account access endpoints: balances, positions and orders.

    All methods require an access token and raise `MissingToken` before
    any request is sent when none is set.
    """

    def get_accounts(
        self,
        params: Optional[GetAccountsParams] = None
    ) -> List[Account]:
        """
        Retrieve balances, and optionally positions and orders, for every
        account linked to the token.

        Parameters
        ----------
        params : GetAccountsParams, optional
            Use ``fields`` to add positions and/or orders to the balances.

        Returns
        -------
        list of Account
            One entry per linked account. Each `securities_account` is a
            `MarginAccount` or a `CashAccount`.

        Raises
        ------
        ApiError
            If the API returns a non-2xx response.
        DecodeError
            If the body does not match the account schema.
        """
        params = params or GetAccountsParams.default()

        data = self.make_request(
            "GET",
            "accounts",
            params=params.encode()
        )

        return decode_list(Account.from_json, data)

    def get_account(
        self,
        account_id: str,
        params: Optional[GetAccountParams] = None
    ) -> Account:
        """
        Retrieve balances, and optionally positions and orders, for a
        single account.

        Parameters
        ----------
        account_id : str
            Account identifier.
        params : GetAccountParams, optional
            Use ``fields`` to add positions and/or orders to the balances.

        Returns
        -------
        Account
        """
        params = params or GetAccountParams.default()

        account = requests.utils.quote(account_id.strip(), safe="")

        data = self.make_request(
            "GET",
            f"accounts/{account}",
            params=params.encode()
        )

        return Account.from_json(data)

    def get_orders(
        self,
        params: Optional[GetOrdersParams] = None
    ) -> List[Order]:
        """
        Retrieve orders across linked accounts, optionally filtered by
        account, entered-time window and status.

        Parameters
        ----------
        params : GetOrdersParams, optional
            Filters. With none set the API returns recent orders for every
            linked account.

        Returns
        -------
        list of Order
        """
        params = params or GetOrdersParams.default()

        data = self.make_request(
            "GET",
            "orders",
            params=params.encode()
        )

        return decode_list(Order.from_json, data)

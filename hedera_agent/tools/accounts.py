"""HBAR and HTS token query tools."""

from hedera_agent.ledger.errors import ErrorCode
from hedera_agent.tools.base import LedgerTool, RunConfig
from hedera_agent.tools.schemas import AccountArgs, ResultEnvelope, TokenBalanceArgs, TokenHoldersArgs

ACCOUNT_REQUIRED = "Account ID is required"
INVALID_ACCOUNT = "Invalid account ID. Expected format: shard.realm.num (e.g. 0.0.1234)"
TOKEN_REQUIRED = "Token ID is required"
INVALID_TOKEN = "Invalid token ID. Expected format: shard.realm.num (e.g. 0.0.1234)"


def _missing_account() -> ResultEnvelope:
    return ResultEnvelope.error(ACCOUNT_REQUIRED, ErrorCode.VALIDATION_ERROR)


class HbarBalanceTool(LedgerTool):
    name = "hedera_get_hbar_balance"
    description = """Retrieves the HBAR balance of an account.
Inputs (input is a JSON string):
- **accountId** (*string*, optional): Account to query. Defaults to the connected account."""
    args_model = AccountArgs
    invalid_messages = {'accountId': INVALID_ACCOUNT}

    async def _run(self, args: AccountArgs, config: RunConfig) -> ResultEnvelope:
        account_id = self.default_account(args.account_id)
        if not account_id:
            return _missing_account()
        balance = await self.client.get_hbar_balance(account_id)
        return ResultEnvelope.success("HBAR balance retrieved", data=balance)


class HtsBalanceTool(LedgerTool):
    name = "hedera_get_hts_balance"
    description = """Retrieves the balance of one Hedera Token Service token for an account.
Inputs (input is a JSON string):
- **tokenId** (*string*, required): Token to query, e.g. 0.0.456858.
- **accountId** (*string*, optional): Account to query. Defaults to the connected account."""
    args_model = TokenBalanceArgs
    required_messages = {'tokenId': TOKEN_REQUIRED}
    invalid_messages = {'tokenId': INVALID_TOKEN, 'accountId': INVALID_ACCOUNT}

    async def _run(self, args: TokenBalanceArgs, config: RunConfig) -> ResultEnvelope:
        account_id = self.default_account(args.account_id)
        if not account_id:
            return _missing_account()
        balance = await self.client.get_hts_balance(args.token_id, account_id)
        return ResultEnvelope.success("Token balance retrieved", data=balance)


class AllTokenBalancesTool(LedgerTool):
    name = "hedera_get_all_token_balances"
    description = """Retrieves every token balance held by an account, with token symbol, name and decimals.
Inputs (input is a JSON string):
- **accountId** (*string*, optional): Account to query. Defaults to the connected account."""
    args_model = AccountArgs
    invalid_messages = {'accountId': INVALID_ACCOUNT}

    async def _run(self, args: AccountArgs, config: RunConfig) -> ResultEnvelope:
        account_id = self.default_account(args.account_id)
        if not account_id:
            return _missing_account()
        balances = await self.client.get_all_token_balances(account_id)
        return ResultEnvelope.success(f"Found {len(balances)} token balances", data=balances)


class TokenHoldersTool(LedgerTool):
    name = "hedera_get_token_holders"
    description = """Lists the accounts holding a token.
Inputs (input is a JSON string):
- **tokenId** (*string*, required): Token to query.
- **threshold** (*number*, optional): Only holders with at least this balance (base units)."""
    args_model = TokenHoldersArgs
    required_messages = {'tokenId': TOKEN_REQUIRED}
    invalid_messages = {
        'tokenId': INVALID_TOKEN,
        'threshold': "Invalid threshold. Must be a non-negative integer",
    }

    async def _run(self, args: TokenHoldersArgs, config: RunConfig) -> ResultEnvelope:
        holders = await self.client.get_token_holders(args.token_id, args.threshold)
        return ResultEnvelope.success(f"Found {len(holders)} token holders", data=holders)


class PendingAirdropsTool(LedgerTool):
    name = "hedera_get_pending_airdrops"
    description = """Lists token airdrops waiting to be claimed by an account.
Inputs (input is a JSON string):
- **accountId** (*string*, optional): Receiving account. Defaults to the connected account."""
    args_model = AccountArgs
    invalid_messages = {'accountId': INVALID_ACCOUNT}

    async def _run(self, args: AccountArgs, config: RunConfig) -> ResultEnvelope:
        account_id = self.default_account(args.account_id)
        if not account_id:
            return _missing_account()
        airdrops = await self.client.get_pending_airdrops(account_id)
        return ResultEnvelope.success(f"Found {len(airdrops)} pending airdrops", data=airdrops)

"""
Configuration management for the Hedera agent
Loads environment variables and validates configuration
"""
import os
from typing import Dict, Any, List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


NETWORKS = ('mainnet', 'testnet', 'previewnet')

SAUCERSWAP_API_URLS = {
    'mainnet': 'https://api.saucerswap.finance',
    'testnet': 'https://test-api.saucerswap.finance',
    'previewnet': 'https://test-api.saucerswap.finance',
}


class Settings:
    """Application settings loaded from environment variables"""

    # Hedera Configuration
    @property
    def hedera_account_id(self) -> str:
        """Operator account (shard.realm.num); also the session cache key"""
        return os.getenv('HEDERA_ACCOUNT_ID', '')

    @property
    def hedera_private_key(self) -> str:
        return os.getenv('HEDERA_PRIVATE_KEY', '')

    @property
    def hedera_network(self) -> str:
        network = os.getenv('HEDERA_NETWORK', 'testnet').lower()
        return network if network in NETWORKS else 'testnet'

    @property
    def mirror_node_url(self) -> str:
        """Mirror node REST base URL (without /api/v1)"""
        return os.getenv(
            'MIRROR_NODE_URL',
            f'https://{self.hedera_network}.mirrornode.hedera.com'
        ).rstrip('/')

    # SaucerSwap Configuration
    @property
    def saucerswap_api_url(self) -> str:
        return os.getenv(
            'SAUCERSWAP_API_URL',
            SAUCERSWAP_API_URLS[self.hedera_network]
        ).rstrip('/')

    @property
    def saucerswap_api_key(self) -> Optional[str]:
        """Optional SaucerSwap API key sent as x-api-key"""
        return os.getenv('SAUCERSWAP_API_KEY') or None

    # Claude AI Configuration
    @property
    def claude_config(self) -> Dict[str, Any]:
        """Get Claude agent configuration"""
        return {
            'api_key': os.getenv('ANTHROPIC_API_KEY', ''),
            'model': os.getenv('CLAUDE_MODEL', 'claude-sonnet-4-20250514'),
            'max_tokens': int(os.getenv('CLAUDE_MAX_TOKENS', '4096')),
        }

    @property
    def max_context_messages(self) -> int:
        """Messages kept per chat session"""
        return int(os.getenv('MAX_CONTEXT_MESSAGES', '20'))

    # Application Settings
    @property
    def custodial_mode(self) -> bool:
        """Execution mode injected into every tool call"""
        return os.getenv('CUSTODIAL_MODE', 'true').lower() in ('true', '1', 'yes')

    @property
    def http_timeout(self) -> float:
        """Total timeout in seconds for mirror node and SaucerSwap requests"""
        return float(os.getenv('HTTP_TIMEOUT', '30'))

    @property
    def log_level(self) -> str:
        return os.getenv('LOG_LEVEL', 'INFO').upper()

    @property
    def log_dir(self) -> str:
        """Directory for log files"""
        return os.getenv('LOG_DIR', 'logs')

    def missing_required_vars(self) -> List[str]:
        """Names of required credentials that are not set"""
        required = {
            'ANTHROPIC_API_KEY': self.claude_config['api_key'],
            'HEDERA_ACCOUNT_ID': self.hedera_account_id,
            'HEDERA_PRIVATE_KEY': self.hedera_private_key,
        }
        return [name for name, value in required.items() if not value]

    def validate_required(self) -> None:
        """
        Validate that the credentials needed to start the agent are present.

        Raises:
            ValueError: If any required variable is missing
        """
        missing = self.missing_required_vars()
        if missing:
            raise ValueError(
                f"Missing required environment variables: {', '.join(missing)}.\n"
                "Expected format in .env:\n"
                "  HEDERA_ACCOUNT_ID=0.0.12345\n"
                "  HEDERA_PRIVATE_KEY=302e...\n"
                "  HEDERA_NETWORK=testnet\n"
                "  ANTHROPIC_API_KEY=sk-ant-..."
            )

    def to_dict(self) -> Dict[str, Any]:
        """Non-secret configuration for startup logging"""
        return {
            'hedera_account_id': self.hedera_account_id,
            'hedera_network': self.hedera_network,
            'mirror_node_url': self.mirror_node_url,
            'saucerswap_api_url': self.saucerswap_api_url,
            'claude_model': self.claude_config['model'],
            'custodial_mode': self.custodial_mode,
            'log_level': self.log_level,
        }


# Global settings instance
settings = Settings()

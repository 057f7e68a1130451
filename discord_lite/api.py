# discord_lite/api.py

import time
import random
from typing import List, Dict, Any, Optional, Tuple
import logging
import requests
from .utils import (
    AuthenticationError,
    DecodeError,
    ReachedMaxRetries,
    ResourceUnavailable,
    UnexpectedStatus,
)


class DiscordAPI:
    BASE_URL = "https://discord.com/api/v10"
    SUCCESS_CODES = {"get": {200}, "post": {200, 201}, "patch": {200}}

    def __init__(
        self,
        token: str,
        max_retries: int = 5,
        retry_time_buffer: Tuple[float, float] = (1.0, 1.0)
    ):
        """
        Initializes the DiscordAPI instance.

        Args:
            token (str): Discord authentication token.
            max_retries (int): Maximum number of retry attempts for rate limiting.
            retry_time_buffer (Tuple[float, float]): Range of additional time to wait after rate limit responses.

        Raises:
            ValueError: If the Discord token is not provided.
        """
        if not token:
            raise ValueError("Discord token not provided.")
        self._token = token

        self.max_retries = max_retries
        self.retry_time_buffer = retry_time_buffer  # (min_buffer, max_buffer)

        self.headers = {
            "Authorization": self._token,
            "Content-Type": "application/json"
        }
        self.session = requests.Session()
        self.session.headers.update(self.headers)
        self.logger = logging.getLogger(self.__class__.__name__)

    def get_current_user(self) -> Dict[str, Any]:
        """
        Fetches the authenticated user's profile.

        Raises:
            AuthenticationError, ResourceUnavailable, ReachedMaxRetries, UnexpectedStatus, DecodeError
        """
        url = f"{self.BASE_URL}/users/@me"
        return self._request(url, description="fetch current user")

    def get_user_settings(self) -> Dict[str, Any]:
        """
        Fetches the user's settings, which hold the saved guild folders and positions.

        Raises:
            AuthenticationError, ResourceUnavailable, ReachedMaxRetries, UnexpectedStatus, DecodeError
        """
        url = f"{self.BASE_URL}/users/@me/settings"
        return self._request(url, description="fetch user settings")

    def get_guilds(self) -> List[Dict[str, Any]]:
        """
        Fetches the list of guilds the user is part of.

        Returns:
            List[Dict[str, Any]]: List of guilds.

        Raises:
            AuthenticationError, ResourceUnavailable, ReachedMaxRetries, UnexpectedStatus, DecodeError
        """
        url = f"{self.BASE_URL}/users/@me/guilds"
        return self._request_list(url, description="fetch guilds")

    def get_guild_channels(self, guild_id: str) -> List[Dict[str, Any]]:
        """
        Fetches channels for a specific guild.

        Args:
            guild_id (str): The ID of the guild.

        Returns:
            List[Dict[str, Any]]: List of channels in the guild.
        """
        url = f"{self.BASE_URL}/guilds/{guild_id}/channels"
        return self._request_list(url, description=f"fetch channels for guild {guild_id}")

    def get_channel_messages(self, channel_id: str, limit: int = 50) -> List[Dict[str, Any]]:
        """
        Fetches the most recent messages of a channel, newest first as Discord returns them.

        Args:
            channel_id (str): The ID of the channel.
            limit (int): Number of messages to fetch (1-100).

        Returns:
            List[Dict[str, Any]]: Raw message payloads.
        """
        url = f"{self.BASE_URL}/channels/{channel_id}/messages"
        return self._request_list(
            url,
            description=f"fetch messages in channel {channel_id}",
            params={"limit": limit},
        )

    def create_message(self, channel_id: str, content: str) -> Dict[str, Any]:
        """
        Posts a message to a channel.

        Args:
            channel_id (str): The ID of the channel.
            content (str): Message text.

        Returns:
            Dict[str, Any]: The created message payload.
        """
        url = f"{self.BASE_URL}/channels/{channel_id}/messages"
        return self._request(
            url,
            description=f"send message to channel {channel_id}",
            method="post",
            payload={"content": content},
        )

    def update_status(self, status: str) -> Dict[str, Any]:
        """
        Updates the user's presence status ("online", "idle", "dnd" or "invisible").
        """
        url = f"{self.BASE_URL}/users/@me/settings"
        return self._request(
            url,
            description=f"set status to {status}",
            method="patch",
            payload={"status": status},
        )

    def _request_list(self, url: str, description: str, params: Optional[Dict[str, Any]] = None) -> List[Dict[str, Any]]:
        data = self._request(url, description=description, params=params)
        if not isinstance(data, list):
            raise DecodeError(f"Expected a JSON array while attempting to {description}, got {type(data).__name__}.")
        return data

    def _request(
        self,
        url: str,
        description: str,
        method: str = "get",
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Internal method to handle requests with retry logic.

        Args:
            url (str): The endpoint URL.
            description (str): Description of the request for logging.
            method (str): HTTP method to use ("get", "post" or "patch").
            params (Optional[Dict[str, Any]]): Query parameters for the request.
            payload (Optional[Dict[str, Any]]): JSON body for the request.

        Returns:
            Any: The decoded JSON response body.

        Raises:
            AuthenticationError: When the request is unauthorized (401).
            ResourceUnavailable: When the resource returns 403/404.
            UnexpectedStatus: For non-handled HTTP status codes.
            ReachedMaxRetries: When the request exceeds max retries.
            DecodeError: When a successful response does not carry JSON.
        """
        assert method in self.SUCCESS_CODES
        success_codes = self.SUCCESS_CODES[method]
        attempts = 0
        while attempts <= self.max_retries:
            try:
                response = self.session.request(method=method, url=url, params=params, json=payload)
            except requests.RequestException as exc:
                buffer = random.uniform(*self.retry_time_buffer)
                total_retry_after = 1 + buffer
                self.logger.warning(
                    "Network error while attempting to %s (%s). Retrying after %.2f seconds.",
                    description,
                    exc,
                    total_retry_after,
                )
                time.sleep(total_retry_after)
                attempts += 1
                continue

            if 200 <= response.status_code < 300:  # success
                if response.status_code not in success_codes:
                    raise UnexpectedStatus(
                        f"Unexpected status {response.status_code} for {method.upper()} while attempting to {description}."
                    )
                try:
                    return response.json()
                except ValueError as exc:
                    raise DecodeError(f"Malformed response while attempting to {description}: {exc}") from exc
            elif response.status_code == 429 or 500 <= response.status_code < 600:  # retry
                try:
                    retry_after = response.json().get("retry_after", 1)
                except Exception:
                    retry_after = 1
                buffer = random.uniform(*self.retry_time_buffer)
                total_retry_after = retry_after + buffer
                self.logger.warning("Rate limit hit while attempting to %s. Retrying after %.2f seconds.", description, total_retry_after)
                time.sleep(total_retry_after)
                attempts += 1
            elif response.status_code == 401:  # unauthorized
                raise AuthenticationError(f"Unauthorized while attempting to {description}. Status Code: 401")
            elif response.status_code in {403, 404}:  # unavailable
                raise ResourceUnavailable(f"Resource unavailable while attempting to {description}. Status Code: {response.status_code}")
            else:  # unhandled
                raise UnexpectedStatus(f"Unhandled status code {response.status_code} while attempting to {description}.")

        raise ReachedMaxRetries(f"Max retries exceeded while attempting to {description}.")

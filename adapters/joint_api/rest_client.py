"""
Joint Account REST API 클라이언트

잔고(Balance Store)와 레코드(Record Ledger) API와 통신하는 클라이언트.
IBalanceStore, IRecordLedger Protocol 준수.

주의: 모든 조회는 캐시 없이 최신 상태를 읽어야 함 (Cache-Control: no-cache)
"""

import logging
from decimal import Decimal
from typing import Any

import httpx

from core.constants import ApiPaths, Defaults
from core.ledger.types import HistoryEntry, Record
from core.utils.amount import parse_amount

logger = logging.getLogger(__name__)


class JointApiError(Exception):
    """Joint Account API 에러

    전송 실패, 비정상 상태 코드, 응답 형식 오류를 모두 포함.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class JointApiClient:
    """Joint Account REST API 클라이언트

    변경 요청은 재시도하지 않음 (실패 시 즉시 JointApiError).

    Args:
        base_url: API 베이스 URL
        timeout: HTTP 요청 타임아웃 (초)

    사용 예시:
    ```python
    async with JointApiClient(base_url="http://localhost:8080") as client:
        balance = await client.get_balance()
        records = await client.get_records()
    ```
    """

    NO_CACHE_HEADERS = {"Cache-Control": "no-cache"}

    def __init__(
        self,
        base_url: str = Defaults.API_BASE_URL,
        timeout: float = Defaults.API_TIMEOUT_SEC,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """HTTP 클라이언트 가져오기 (lazy initialization)"""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """HTTP 클라이언트 종료"""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        content: str | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """API 요청 실행

        Args:
            method: HTTP 메서드 (GET, PUT)
            path: API 경로 (예: /api/v1/balance)
            params: 쿼리 파라미터
            json: JSON 요청 본문
            content: 텍스트 요청 본문 (text/plain)
            headers: 추가 헤더

        Returns:
            JSON 응답 (본문이 없으면 None)

        Raises:
            JointApiError: 전송 실패, 상태 코드 400 이상, JSON 파싱 실패 시
        """
        client = await self._get_client()
        url = f"{self.base_url}{path}"
        request_headers = dict(self.NO_CACHE_HEADERS)
        if headers:
            request_headers.update(headers)

        try:
            response = await client.request(
                method,
                url,
                params=params,
                json=json,
                content=content,
                headers=request_headers,
            )
        except httpx.RequestError as e:
            logger.error(
                f"Request error: {method} {path} - {e}",
                extra={"path": path},
            )
            raise JointApiError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            logger.error(
                f"Joint API error: {response.status_code} - {response.text}",
                extra={"path": path, "status_code": response.status_code},
            )
            raise JointApiError(
                f"{method} {path} failed with status {response.status_code}",
                status_code=response.status_code,
            )

        if not response.content:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Malformed response body: {method} {path}")
            raise JointApiError(
                f"Malformed response from {path}",
                status_code=response.status_code,
            ) from e

    # =========================================================================
    # 잔고 (Balance Store)
    # =========================================================================

    async def get_balance(self) -> Decimal:
        """현재 잔고 조회

        Returns:
            현재 잔고
        """
        data = await self._request("GET", ApiPaths.BALANCE)
        return self._parse_balance(data, ApiPaths.BALANCE)

    async def apply_offset(self, offset: Decimal, comment: str) -> Decimal:
        """잔고 변경 (offset 적용)

        Args:
            offset: 부호 포함 변경 금액
            comment: 코멘트 (최대 100자, 호출 전 검증됨)

        Returns:
            변경 후 잔고
        """
        data = await self._request(
            "PUT",
            ApiPaths.BALANCE,
            json={"offset": str(offset), "comment": comment},
        )
        return self._parse_balance(data, ApiPaths.BALANCE)

    async def get_history(self, limit: int) -> list[HistoryEntry]:
        """잔고 변경 이력 조회

        Args:
            limit: 최대 조회 개수

        Returns:
            최신순 이력 목록
        """
        data = await self._request(
            "GET",
            ApiPaths.BALANCE_HISTORY,
            params={"limit": limit},
        )
        entries = self._parse_list(data, HistoryEntry.from_api, ApiPaths.BALANCE_HISTORY)
        # 서버가 limit를 무시하더라도 최대 limit개만 반환
        return entries[:limit]

    # =========================================================================
    # 레코드 (Record Ledger)
    # =========================================================================

    async def get_records(self) -> list[Record]:
        """전체 레코드 조회

        Returns:
            API 반환 순서 그대로의 레코드 목록
        """
        data = await self._request("GET", ApiPaths.RECORDS)
        return self._parse_list(data, Record.from_api, ApiPaths.RECORDS)

    async def set_record_amount(self, record_id: int, amount: Decimal) -> None:
        """레코드 금액 설정

        Args:
            record_id: 레코드 ID
            amount: 새 금액
        """
        await self._request(
            "PUT",
            ApiPaths.record_amount(record_id),
            content=str(amount),
            headers={"Content-Type": "text/plain"},
        )

    async def mark_record_paid(self, record_id: int) -> None:
        """레코드 지급 완료 처리

        Args:
            record_id: 레코드 ID
        """
        await self._request("PUT", ApiPaths.record_paid(record_id))

    # =========================================================================
    # 응답 파싱
    # =========================================================================

    @staticmethod
    def _parse_balance(data: Any, path: str) -> Decimal:
        """{"amount": number} 응답 파싱"""
        try:
            return parse_amount(data["amount"])
        except (KeyError, TypeError, ValueError) as e:
            raise JointApiError(f"Malformed balance response from {path}: {data!r}") from e

    @staticmethod
    def _parse_list(data: Any, parser: Any, path: str) -> list[Any]:
        """목록 응답 파싱 (항목 하나라도 잘못되면 전체 실패)"""
        if not isinstance(data, list):
            raise JointApiError(f"Expected a list from {path}, got {type(data).__name__}")
        try:
            return [parser(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise JointApiError(f"Malformed item in response from {path}: {e}") from e

    # -------------------------------------------------------------------------
    # Context Manager 지원
    # -------------------------------------------------------------------------

    async def __aenter__(self) -> "JointApiClient":
        """async with 진입"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """async with 종료 시 클라이언트 정리"""
        await self.close()

"""
Joint Account API 어댑터

잔고/레코드 REST API 연동.
IBalanceStore, IRecordLedger Protocol 준수.
"""

from adapters.joint_api.rest_client import JointApiClient, JointApiError

__all__ = [
    "JointApiClient",
    "JointApiError",
]

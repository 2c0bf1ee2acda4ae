"""
Core data models for the sales CRM.

This package contains:
- User, role and directory models
- CRM entity models (anchors, spokes, tasks, activities)
- AI flow input/output schemas
- Visibility (permission) scoping
"""

from .users import Role, RoleInfo, ROLE_HIERARCHY, User, UserDirectory, can_manage, is_managerial, role_rank
from .entities import (
    ActivityLog,
    Anchor,
    Contact,
    CRMModel,
    DailyActivity,
    Dealer,
    GeoPoint,
    LeadStatus,
    NextBestAction,
    NextBestActionType,
    Spoke,
    Task,
    TaskPriority,
    TaskStatus,
    Vendor,
)
from .flow_schemas import (
    ActivityMetrics,
    CustomerType,
    HighlightsInput,
    HighlightsOutput,
    InteractionLogEntry,
    LeadScoringInput,
    LeadScoringOutput,
    LeadMetrics,
    OnboardingPlanInput,
    OnboardingPlanOutput,
    OnboardingTask,
    Performer,
    PipelineAnalysis,
    QualifyLeadInput,
    QualifyLeadOutput,
    ReverseGeocodeInput,
    ReverseGeocodeOutput,
    SalesCoachingInput,
    SalesCoachingOutput,
    SpokeScoringInput,
    SpokeScoringOutput,
    SuggestNextActionInput,
    SuggestNextActionOutput,
    TranscriptionInput,
    TranscriptionOutput,
)
from .permissions import VisibilityScope, compute_visible_identities, filter_by_owner
from . import utils

__all__ = [
    # Directory models
    "Role",
    "RoleInfo",
    "ROLE_HIERARCHY",
    "User",
    "UserDirectory",
    "can_manage",
    "is_managerial",
    "role_rank",

    # Entities
    "ActivityLog",
    "Anchor",
    "Contact",
    "CRMModel",
    "DailyActivity",
    "Dealer",
    "GeoPoint",
    "LeadStatus",
    "NextBestAction",
    "NextBestActionType",
    "Spoke",
    "Task",
    "TaskPriority",
    "TaskStatus",
    "Vendor",

    # Flow schemas
    "ActivityMetrics",
    "CustomerType",
    "HighlightsInput",
    "HighlightsOutput",
    "LeadMetrics",
    "OnboardingPlanInput",
    "OnboardingPlanOutput",
    "OnboardingTask",
    "Performer",
    "PipelineAnalysis",
    "SalesCoachingInput",
    "SalesCoachingOutput",
    "InteractionLogEntry",
    "LeadScoringInput",
    "LeadScoringOutput",
    "QualifyLeadInput",
    "QualifyLeadOutput",
    "ReverseGeocodeInput",
    "ReverseGeocodeOutput",
    "SpokeScoringInput",
    "SpokeScoringOutput",
    "SuggestNextActionInput",
    "SuggestNextActionOutput",
    "TranscriptionInput",
    "TranscriptionOutput",

    # Visibility
    "VisibilityScope",
    "compute_visible_identities",
    "filter_by_owner",

    # Utilities
    "utils"
]

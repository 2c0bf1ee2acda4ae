"""
CRM entity models: anchors, spokes (dealers/vendors), tasks and activity records.

Each entity names the field that identifies its owning user through
``owner_field``; the visibility layer filters on that field.
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CRMModel(BaseModel):
    """Base for CRM records: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    owner_field: ClassVar[str] = "assigned_to"

    def owner_id(self) -> Optional[str]:
        """Id of the user that owns this record, if any."""
        return getattr(self, self.owner_field)


class LeadStatus(str, Enum):
    """Pipeline status of an anchor."""
    LEAD = "Lead"
    INITIAL_CONTACT = "Initial Contact"
    PROPOSAL = "Proposal"
    NEGOTIATION = "Negotiation"
    ONBOARDING = "Onboarding"
    ACTIVE = "Active"
    UNASSIGNED_LEAD = "Unassigned Lead"
    ASSIGNED = "Assigned"
    CONTACTED = "Contacted"
    REJECTED = "Rejected"
    ARCHIVED = "Archived"
    PENDING_APPROVAL = "Pending Approval"


class TaskStatus(str, Enum):
    TODO = "To-Do"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TaskPriority(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class NextBestActionType(str, Enum):
    """Fixed set of actions the next-action flow may recommend."""
    SEND_FOLLOW_UP_EMAIL = "Send Follow-up Email"
    SCHEDULE_DEMO_CALL = "Schedule a Demo Call"
    SEND_CASE_STUDY = "Send Industry Case Study"
    ADDRESS_QUESTION = "Address a Specific Question"
    NURTURE = "Nurture (Wait)"
    MARK_UNQUALIFIED = "Mark as Unqualified"


class Contact(CRMModel):
    id: str
    name: str
    designation: Optional[str] = None
    email: Optional[str] = None
    phone: str
    is_primary: bool = False


class NextBestAction(CRMModel):
    recommended_action: NextBestActionType
    justification: str


class Anchor(CRMModel):
    """A top-level company/account."""

    owner_field: ClassVar[str] = "created_by"

    id: str
    lead_id: Optional[str] = None
    name: str
    industry: str
    annual_turnover: Optional[str] = None
    credit_rating: Optional[str] = None
    address: Optional[str] = None
    status: LeadStatus = LeadStatus.LEAD
    lead_score: Optional[float] = None
    lead_score_reason: Optional[str] = None
    dealer_ids: List[str] = Field(default_factory=list)
    vendor_ids: List[str] = Field(default_factory=list)
    contacts: List[Contact] = Field(default_factory=list)
    next_best_action: Optional[NextBestAction] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None


class Spoke(CRMModel):
    """A dealer or vendor lead attached to an anchor."""

    id: str
    name: str
    status: str = "New"
    anchor_id: Optional[str] = None
    assigned_to: Optional[str] = None
    contacts: List[Contact] = Field(default_factory=list)
    product: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zone: Optional[str] = None
    lead_source: Optional[str] = None
    deal_value: Optional[float] = None
    lead_score: Optional[float] = None
    lead_score_reason: Optional[str] = None
    next_best_action: Optional[NextBestAction] = None
    created_at: Optional[datetime] = None


class Dealer(Spoke):
    pass


class Vendor(Spoke):
    pass


class Task(CRMModel):
    id: str
    title: str
    type: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: TaskPriority = TaskPriority.MEDIUM
    description: str = ""
    status: TaskStatus = TaskStatus.TODO
    assigned_to: Optional[str] = None
    anchor_id: Optional[str] = None
    dealer_id: Optional[str] = None
    vendor_id: Optional[str] = None


class ActivityLog(CRMModel):
    """System or user generated entry in an account's activity history."""

    owner_field: ClassVar[str] = "user_id"

    id: str
    timestamp: datetime
    type: str
    title: str
    outcome: str = ""
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    anchor_id: Optional[str] = None
    dealer_id: Optional[str] = None
    vendor_id: Optional[str] = None
    task_id: Optional[str] = None
    system_generated: bool = False


class GeoPoint(CRMModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class DailyActivity(CRMModel):
    """A field activity logged by a sales user (meeting, site visit, ...)."""

    owner_field: ClassVar[str] = "user_id"

    id: str
    user_id: Optional[str] = None
    user_name: Optional[str] = None
    activity_type: str
    title: str
    notes: Optional[str] = None
    activity_timestamp: datetime
    location: Optional[GeoPoint] = None
    address: Optional[str] = None
    anchor_id: Optional[str] = None
    dealer_id: Optional[str] = None
    vendor_id: Optional[str] = None

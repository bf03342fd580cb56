"""Static catalogs: hand-authored records known at import time.

These views never fetch and never fail. Their summary statistics are fixed
display values, not figures computed from the records.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .cards import AssessmentCard, BenefitBlock, FAQItem, LeafCard, OnStart, PlaygroundCard
from .records import CatalogRecord, FAQRecord


@dataclass(frozen=True)
class SummaryStat:
    value: str
    label: str


ASSESSMENTS: tuple[CatalogRecord, ...] = (
    CatalogRecord(
        identifier="ai-ml-fundamentals",
        title="AI & Machine Learning Fundamentals",
        description="Test your knowledge of core ML concepts, algorithms, and practical applications",
        kind="quiz",
        difficulty="Intermediate",
        duration_minutes=45,
        question_count=25,
        percentage=78,
        attempts=1250,
        topics=("Supervised Learning", "Neural Networks", "Model Evaluation", "Feature Engineering"),
    ),
    CatalogRecord(
        identifier="cloud-architecture-design",
        title="Cloud Architecture Design",
        description="Evaluate your skills in designing scalable cloud solutions and best practices",
        kind="assignment",
        difficulty="Advanced",
        duration_minutes=60,
        question_count=30,
        percentage=65,
        attempts=890,
        topics=("AWS Services", "Microservices", "Security", "Cost Optimization"),
    ),
    CatalogRecord(
        identifier="full-stack-capstone",
        title="Full-Stack Development Capstone",
        description="Comprehensive assessment covering frontend, backend, and database technologies",
        kind="final_exam",
        difficulty="Advanced",
        duration_minutes=90,
        question_count=40,
        percentage=72,
        attempts=650,
        topics=("React", "Node.js", "Database Design", "API Development"),
    ),
)

ASSESSMENT_SUMMARY: tuple[SummaryStat, ...] = (
    SummaryStat("150+", "Assessment Topics"),
    SummaryStat("25K+", "Certificates Issued"),
    SummaryStat("92%", "Industry Recognition"),
    SummaryStat("Real-time", "Results & Feedback"),
)

ASSESSMENT_FEATURES: tuple[CatalogRecord, ...] = (
    CatalogRecord("instant-results", "Instant Results", "Get immediate feedback and detailed performance analytics"),
    CatalogRecord("industry-recognition", "Industry Recognition", "Certificates recognized by leading tech companies"),
    CatalogRecord("adaptive-testing", "Adaptive Testing", "Questions adapt to your skill level for accurate assessment"),
    CatalogRecord("detailed-analytics", "Detailed Analytics", "Comprehensive reports showing strengths and improvement areas"),
)

PLAYGROUNDS: tuple[CatalogRecord, ...] = (
    CatalogRecord("aws-genai", "AWS Gen AI Sandbox", "Experiment with AWS Gen AI tools in a safe, isolated environment."),
    CatalogRecord("aws", "AWS Sandbox", "Access a full-featured AWS sandbox for hands-on learning."),
    CatalogRecord("gcp", "GCP Sandbox", "Explore Google Cloud Platform with instant access."),
    CatalogRecord("azure", "Azure Sandbox", "Try out Microsoft Azure services in a secure sandbox."),
    CatalogRecord("hyperv", "Microsoft Hyper-V Sandbox", "Virtualize and test with Hyper-V environments."),
    CatalogRecord("powerbi", "Power BI Sandbox", "Analyze and visualize data with Power BI."),
    CatalogRecord("code", "Code Sandbox", "Write and run code in a multi-language playground."),
    CatalogRecord("jupyter", "Jupyter Sandbox", "Run Python notebooks and data science experiments."),
)

SANDBOX_BENEFITS: tuple[CatalogRecord, ...] = (
    CatalogRecord("zero-setup", "Zero Environment Setup", "Instant access, no credit card required."),
    CatalogRecord("test-ideas", "Test your Ideas & Innovations", "Safely try new things without risk."),
    CatalogRecord("secure", "Secure Environment", "Each sandbox is isolated and protected."),
    CatalogRecord("zero-cost", "Zero Infrastructure Cost", "No hidden charges, no surprise bills."),
    CatalogRecord("auto-deletion", "Automated Deletion", "Sandboxes are cleaned up automatically."),
    CatalogRecord("support", "Product Support", "Get help when you need it."),
    CatalogRecord("friendly-ui", "User-Friendly UI", "Simple, modern, and easy to use."),
)

SANDBOX_FAQS: tuple[FAQRecord, ...] = (
    FAQRecord("What is a cloud sandbox?", "A cloud sandbox is a secure, isolated environment for testing, learning, and experimentation."),
    FAQRecord("How do I access a sandbox?", 'Click "Get Started" or "Start [Sandbox]" to launch a new environment instantly.'),
    FAQRecord("Are there usage limits?", "Yes, each sandbox has time and resource limits to ensure fair use."),
    FAQRecord("Is my data private?", "Yes, your sandbox is isolated and your data is not shared."),
    FAQRecord("What is the abuse policy?", "Sandboxes are for learning and testing only. Abuse will result in access restrictions."),
)


class StaticCatalogView:
    """One card per record, in the order given, plus fixed summary stats."""

    card_class: type[LeafCard] = LeafCard

    def __init__(
        self,
        records: Sequence,
        summary: Sequence[SummaryStat] = (),
        on_start: Optional[OnStart] = None,
    ):
        self.records = tuple(records)
        self.summary = tuple(summary)
        self.on_start = on_start

    @property
    def cards(self) -> list[LeafCard]:
        return [self.card_class(record, self.on_start) for record in self.records]

    def find(self, identifier: str) -> Optional[LeafCard]:
        for card in self.cards:
            if card.identifier == identifier:
                return card
        return None


class AssessmentsCatalog(StaticCatalogView):
    card_class = AssessmentCard

    def __init__(self, on_start: Optional[OnStart] = None):
        super().__init__(ASSESSMENTS, ASSESSMENT_SUMMARY, on_start)
        self.features = [BenefitBlock(record) for record in ASSESSMENT_FEATURES]


class CloudSandboxCatalog(StaticCatalogView):
    card_class = PlaygroundCard

    def __init__(self, on_start: Optional[OnStart] = None):
        super().__init__(PLAYGROUNDS, on_start=on_start)
        self.benefits = [BenefitBlock(record) for record in SANDBOX_BENEFITS]
        self.faqs = [FAQItem(record) for record in SANDBOX_FAQS]

    @property
    def cards(self) -> list[LeafCard]:
        return [
            PlaygroundCard(record, self.on_start, position=i)
            for i, record in enumerate(self.records, start=1)
        ]

    def get(self, slug: str) -> Optional[CatalogRecord]:
        for record in self.records:
            if record.identifier == slug:
                return record
        return None

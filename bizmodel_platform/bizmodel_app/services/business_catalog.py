"""Static catalog of business models and the attribute profiles used for scoring."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, List, Sequence

COLLABORATION_STYLES = ("solo", "mixed", "team")

# Order of the 1-5 demand levels accepted by `_profile`.
_LEVEL_FIELDS = (
    "visibility",
    "client_contact",
    "tech_level",
    "creativity",
    "risk",
    "structure",
    "self_direction",
    "consistency",
    "sales_intensity",
    "audience_building",
    "resilience",
)


@dataclass(frozen=True)
class ModelProfile:
    months_to_first_income: float
    min_investment: int
    income_ceiling: int
    min_weekly_hours: int
    visibility: int
    client_contact: int
    tech_level: int
    creativity: int
    risk: int
    structure: int
    self_direction: int
    consistency: int
    sales_intensity: int
    audience_building: int
    resilience: int
    passive_potential: int
    collaboration: str
    physical_products: bool = False
    holds_inventory: bool = False
    teaching: bool = False


@dataclass(frozen=True)
class IncomeBands:
    beginner: str
    intermediate: str
    advanced: str


@dataclass(frozen=True)
class BusinessModel:
    id: str
    name: str
    emoji: str
    description: str
    difficulty: str
    time_to_profit: str
    startup_cost: str
    potential_income: str
    average_income: IncomeBands
    tools: tuple[str, ...]
    skills: tuple[str, ...]
    profile: ModelProfile

    def to_dict(self, *, include_profile: bool = False) -> dict:
        data = {
            "id": self.id,
            "name": self.name,
            "emoji": self.emoji,
            "description": self.description,
            "difficulty": self.difficulty,
            "time_to_profit": self.time_to_profit,
            "startup_cost": self.startup_cost,
            "potential_income": self.potential_income,
            "average_income": asdict(self.average_income),
            "tools": list(self.tools),
            "skills": list(self.skills),
        }
        if include_profile:
            data["profile"] = asdict(self.profile)
        return data


def _profile(
    months: float,
    investment: int,
    ceiling: int,
    hours: int,
    levels: Sequence[int],
    passive: int,
    collaboration: str,
    **flags: bool,
) -> ModelProfile:
    if len(levels) != len(_LEVEL_FIELDS):
        raise ValueError(f"expected {len(_LEVEL_FIELDS)} levels, got {len(levels)}")
    if collaboration not in COLLABORATION_STYLES:
        raise ValueError(f"unknown collaboration style: {collaboration}")
    return ModelProfile(
        months_to_first_income=months,
        min_investment=investment,
        income_ceiling=ceiling,
        min_weekly_hours=hours,
        passive_potential=passive,
        collaboration=collaboration,
        **dict(zip(_LEVEL_FIELDS, levels)),
        **flags,
    )


_CATALOG: List[BusinessModel] = [
    BusinessModel(
        id="content-creation",
        name="Content Creation / UGC",
        emoji="🚀",
        description="Create videos, photos, blogs, or social media posts for personal brands or other businesses",
        difficulty="Easy",
        time_to_profit="2-4 weeks",
        startup_cost="$0-300",
        potential_income="$0-20K/month",
        average_income=IncomeBands("$0-500/month", "$500-5K/month", "$5K-20K/month"),
        tools=("CapCut", "Canva", "TikTok", "Instagram", "Notion"),
        skills=("Creative thinking", "Communication", "Social media", "Visual storytelling", "Trend awareness"),
        profile=_profile(1, 0, 20000, 10, (5, 2, 3, 5, 3, 2, 5, 5, 3, 5, 5), 3, "solo"),
    ),
    BusinessModel(
        id="freelancing",
        name="Freelancing",
        emoji="🧑‍💻",
        description="Offer specialized services to clients on a project or contract basis",
        difficulty="Easy",
        time_to_profit="1-2 weeks",
        startup_cost="$0-500",
        potential_income="$1K-15K+/month",
        average_income=IncomeBands("$500-2K/month", "$2K-8K/month", "$8K-15K+/month"),
        tools=("Upwork", "Fiverr", "LinkedIn", "Slack", "Zoom"),
        skills=("Specialized expertise", "Client communication", "Project management", "Time management", "Networking"),
        profile=_profile(0.5, 0, 15000, 15, (2, 4, 3, 3, 2, 3, 4, 3, 3, 1, 3), 1, "solo"),
    ),
    BusinessModel(
        id="affiliate-marketing",
        name="Affiliate Marketing",
        emoji="🔗",
        description="Promote other companies' products and earn commissions on successful referrals",
        difficulty="Medium",
        time_to_profit="3-6 months",
        startup_cost="$0-1000",
        potential_income="$0-50K+/month",
        average_income=IncomeBands("$0-500/month", "$500-5K/month", "$5K-50K+/month"),
        tools=("WordPress", "ConvertKit", "Google Analytics", "Canva", "Social media platforms"),
        skills=("Content creation", "SEO", "Email marketing", "Social media marketing", "Analytics"),
        profile=_profile(4, 0, 50000, 10, (3, 1, 3, 3, 3, 3, 4, 5, 4, 5, 4), 5, "solo"),
    ),
    BusinessModel(
        id="online-coaching",
        name="Online Coaching",
        emoji="🧑‍💼",
        description="Provide expertise and guidance to clients in your area of specialization",
        difficulty="Easy",
        time_to_profit="1-2 weeks",
        startup_cost="$0-200",
        potential_income="$1K-10K/month",
        average_income=IncomeBands("$500-2K/month", "$2K-5K/month", "$5K-10K/month"),
        tools=("Zoom", "Google Meet", "Teachable", "Udemy", "Calendly"),
        skills=("Subject expertise", "Teaching ability", "Patience", "Communication", "Technology"),
        profile=_profile(0.5, 0, 10000, 10, (4, 5, 2, 3, 2, 3, 4, 3, 4, 3, 3), 1, "solo", teaching=True),
    ),
    BusinessModel(
        id="e-commerce",
        name="E-commerce Store",
        emoji="🛒",
        description="Sell physical or digital products online through your own store",
        difficulty="Medium",
        time_to_profit="2-6 months",
        startup_cost="$500-5K",
        potential_income="$1K-100K+/month",
        average_income=IncomeBands("$0-2K/month", "$2K-15K/month", "$15K-100K+/month"),
        tools=("Shopify", "WooCommerce", "Facebook Ads", "Google Analytics", "Klaviyo"),
        skills=("Digital marketing", "Product sourcing", "Customer service", "Analytics", "Design"),
        profile=_profile(
            3, 500, 100000, 15, (2, 2, 3, 3, 4, 4, 4, 4, 3, 3, 4), 3, "mixed",
            physical_products=True, holds_inventory=True,
        ),
    ),
    BusinessModel(
        id="youtube-automation",
        name="YouTube Automation",
        emoji="📺",
        description="Create and monetize YouTube channels with minimal personal involvement",
        difficulty="Medium",
        time_to_profit="3-6 months",
        startup_cost="$500-2K",
        potential_income="$1K-50K+/month",
        average_income=IncomeBands("$0-500/month", "$500-5K/month", "$5K-50K+/month"),
        tools=("TubeBuddy", "VidIQ", "Canva", "AI voice tools", "Stock footage"),
        skills=("Video editing", "SEO optimization", "Market research", "Analytics", "Outsourcing"),
        profile=_profile(4, 500, 50000, 10, (1, 1, 3, 4, 3, 4, 4, 4, 1, 4, 4), 4, "team"),
    ),
    BusinessModel(
        id="local-service",
        name="Local Service Business",
        emoji="🛠️",
        description="Provide services to businesses and residents in your local area",
        difficulty="Easy",
        time_to_profit="1-4 weeks",
        startup_cost="$100-2K",
        potential_income="$2K-20K/month",
        average_income=IncomeBands("$1K-3K/month", "$3K-8K/month", "$8K-20K/month"),
        tools=("Google My Business", "Nextdoor", "Square", "QuickBooks", "Scheduling apps"),
        skills=("Service expertise", "Customer service", "Local marketing", "Operations", "Reliability"),
        profile=_profile(0.5, 100, 20000, 20, (2, 4, 1, 2, 2, 4, 3, 4, 3, 1, 3), 1, "mixed"),
    ),
    BusinessModel(
        id="high-ticket-sales",
        name="High-Ticket Sales",
        emoji="🤝",
        description="Sell premium products or services with substantial commission potential",
        difficulty="Hard",
        time_to_profit="2-6 months",
        startup_cost="$0-1K",
        potential_income="$5K-100K+/month",
        average_income=IncomeBands("$2K-8K/month", "$8K-25K/month", "$25K-100K+/month"),
        tools=("CRM software", "LinkedIn Sales Navigator", "Zoom", "Email automation", "Calendly"),
        skills=("Communication", "Relationship building", "Negotiation", "Psychology", "Persistence"),
        profile=_profile(3, 0, 100000, 20, (2, 5, 2, 2, 3, 3, 4, 4, 5, 1, 5), 1, "team"),
    ),
    BusinessModel(
        id="saas-development",
        name="SaaS Development",
        emoji="💻",
        description="Build software applications that generate recurring subscription revenue",
        difficulty="Hard",
        time_to_profit="6-18 months",
        startup_cost="$500-5K",
        potential_income="$1K-500K+/month",
        average_income=IncomeBands("$0-2K/month", "$2K-25K/month", "$25K-500K+/month"),
        tools=("AWS", "React", "Node.js", "Stripe", "Analytics tools"),
        skills=("Programming", "Product management", "UI/UX design", "Marketing", "Customer support"),
        profile=_profile(9, 500, 500000, 25, (1, 2, 5, 4, 5, 4, 5, 5, 3, 3, 5), 5, "team"),
    ),
    BusinessModel(
        id="social-media-agency",
        name="Social Media Marketing Agency",
        emoji="📣",
        description="Help businesses grow their online presence through social media management",
        difficulty="Medium",
        time_to_profit="1-3 months",
        startup_cost="$500-2K",
        potential_income="$3K-50K+/month",
        average_income=IncomeBands("$2K-5K/month", "$5K-15K/month", "$15K-50K+/month"),
        tools=("Hootsuite", "Canva", "Facebook Ads Manager", "Analytics tools", "Scheduling software"),
        skills=("Social media marketing", "Content creation", "Analytics", "Client management", "Design"),
        profile=_profile(2, 500, 50000, 20, (2, 4, 3, 4, 3, 3, 4, 4, 4, 2, 4), 2, "team"),
    ),
    BusinessModel(
        id="ai-marketing-agency",
        name="AI Marketing Agency",
        emoji="🤖",
        description="Leverage AI tools to provide cutting-edge marketing solutions for businesses",
        difficulty="Hard",
        time_to_profit="2-6 months",
        startup_cost="$1K-5K",
        potential_income="$5K-100K+/month",
        average_income=IncomeBands("$3K-8K/month", "$8K-25K/month", "$25K-100K+/month"),
        tools=("OpenAI API", "Claude", "Midjourney", "Marketing automation platforms", "Analytics tools"),
        skills=("AI tool mastery", "Marketing strategy", "Data analysis", "Technical integration", "Client education"),
        profile=_profile(3, 1000, 100000, 20, (2, 4, 4, 4, 4, 3, 4, 4, 4, 2, 4), 2, "team"),
    ),
    BusinessModel(
        id="digital-services",
        name="Digital Services",
        emoji="💻",
        description="Provide specialized digital services like web development, design, or consulting",
        difficulty="Medium",
        time_to_profit="1-3 months",
        startup_cost="$0-1K",
        potential_income="$2K-30K+/month",
        average_income=IncomeBands("$1K-3K/month", "$3K-10K/month", "$10K-30K+/month"),
        tools=("Adobe Creative Suite", "Figma", "WordPress", "Google Analytics", "Project management tools"),
        skills=("Technical expertise", "Design thinking", "Client communication", "Project management", "Marketing"),
        profile=_profile(2, 0, 30000, 15, (2, 4, 4, 4, 2, 3, 4, 3, 3, 1, 3), 1, "mixed"),
    ),
    BusinessModel(
        id="investing-trading",
        name="Investing & Trading",
        emoji="💹",
        description="Generate returns through strategic investment in various financial instruments",
        difficulty="Hard",
        time_to_profit="3-12 months",
        startup_cost="$1K-10K+",
        potential_income="$500-unlimited/month",
        average_income=IncomeBands(
            "$0-1K/month (high variance)",
            "$1K-5K/month (high variance)",
            "$5K-unlimited/month (high variance)",
        ),
        tools=("Trading platforms", "Charting software", "News feeds", "Portfolio trackers", "Risk management tools"),
        skills=("Market analysis", "Risk management", "Emotional control", "Research", "Mathematical thinking"),
        profile=_profile(6, 1000, 100000, 5, (1, 1, 3, 1, 5, 4, 5, 4, 1, 1, 5), 4, "solo"),
    ),
    BusinessModel(
        id="copywriting",
        name="Copywriting",
        emoji="✍️",
        description="Write persuasive marketing and sales copy for businesses and brands",
        difficulty="Medium",
        time_to_profit="1-3 months",
        startup_cost="$0-500",
        potential_income="$2K-25K+/month",
        average_income=IncomeBands("$1K-3K/month", "$3K-10K/month", "$10K-25K+/month"),
        tools=("Google Docs", "Grammarly", "Hemingway Editor", "Research tools", "Project management"),
        skills=("Persuasive writing", "Psychology", "Market research", "A/B testing", "Client communication"),
        profile=_profile(2, 0, 25000, 15, (1, 3, 2, 4, 2, 3, 4, 3, 3, 1, 3), 1, "solo"),
    ),
    BusinessModel(
        id="virtual-assistant",
        name="Virtual Assistant",
        emoji="👥",
        description="Provide remote administrative, technical, or creative support to businesses",
        difficulty="Easy",
        time_to_profit="1-2 weeks",
        startup_cost="$0-300",
        potential_income="$1K-8K/month",
        average_income=IncomeBands("$800-2K/month", "$2K-5K/month", "$5K-8K/month"),
        tools=("Slack", "Zoom", "Trello", "Google Workspace", "Time tracking software"),
        skills=("Organization", "Communication", "Technical proficiency", "Problem-solving", "Reliability"),
        profile=_profile(0.5, 0, 8000, 20, (1, 4, 3, 1, 1, 5, 3, 3, 1, 1, 2), 1, "mixed"),
    ),
    BusinessModel(
        id="online-reselling",
        name="Online Reselling",
        emoji="📦",
        description="Buy and resell products online through platforms like eBay, Amazon, or Poshmark",
        difficulty="Easy",
        time_to_profit="1-4 weeks",
        startup_cost="$200-2K",
        potential_income="$1K-15K+/month",
        average_income=IncomeBands("$500-2K/month", "$2K-8K/month", "$8K-15K+/month"),
        tools=("Amazon Seller App", "eBay", "Facebook Marketplace", "Keepa", "Inventory management software"),
        skills=("Product research", "Market analysis", "Negotiation", "Customer service", "Inventory management"),
        profile=_profile(
            0.5, 200, 15000, 10, (1, 2, 2, 2, 3, 4, 4, 4, 2, 1, 3), 2, "solo",
            physical_products=True, holds_inventory=True,
        ),
    ),
    BusinessModel(
        id="handmade-goods",
        name="Handmade Goods",
        emoji="🧶",
        description="Create and sell handmade products such as crafts, jewelry, or art",
        difficulty="Easy",
        time_to_profit="2-8 weeks",
        startup_cost="$100-1K",
        potential_income="$500-10K+/month",
        average_income=IncomeBands("$200-1K/month", "$1K-4K/month", "$4K-10K+/month"),
        tools=("Etsy", "Shopify", "Canva", "Social media platforms", "Photography equipment"),
        skills=("Crafting expertise", "Photography", "Product design", "Customer service", "Social media marketing"),
        profile=_profile(
            1, 100, 10000, 10, (3, 2, 1, 5, 2, 3, 4, 4, 3, 3, 3), 2, "solo",
            physical_products=True, holds_inventory=True,
        ),
    ),
    BusinessModel(
        id="amazon-fba",
        name="Amazon FBA",
        emoji="🏷️",
        description="Sell products using Amazon's Fulfillment by Amazon (FBA) service",
        difficulty="Medium",
        time_to_profit="2-8 months",
        startup_cost="$1K-10K",
        potential_income="$2K-50K+/month",
        average_income=IncomeBands("$1K-5K/month", "$5K-20K/month", "$20K-50K+/month"),
        tools=("Helium 10", "Jungle Scout", "AMZScout", "Seller Central", "Keepa"),
        skills=("Product research", "Market analysis", "Supplier negotiation", "Amazon SEO", "Inventory management"),
        profile=_profile(
            4, 1000, 50000, 15, (1, 1, 3, 2, 4, 4, 4, 4, 2, 2, 4), 4, "mixed",
            physical_products=True, holds_inventory=True,
        ),
    ),
    BusinessModel(
        id="podcasting",
        name="Podcasting",
        emoji="🎙️",
        description="Create and monetize audio content through podcasts",
        difficulty="Medium",
        time_to_profit="6-12 months",
        startup_cost="$100-1K",
        potential_income="$500-20K+/month",
        average_income=IncomeBands("$0-500/month", "$500-5K/month", "$5K-20K+/month"),
        tools=("Anchor", "Audacity", "Zoom", "Canva", "Mailchimp"),
        skills=("Audio recording and editing", "Content planning", "Interview skills", "Marketing and promotion", "Audience building"),
        profile=_profile(8, 100, 20000, 8, (5, 3, 3, 4, 2, 3, 4, 5, 3, 5, 4), 3, "mixed"),
    ),
    BusinessModel(
        id="blogging",
        name="Blogging",
        emoji="📝",
        description="Write and monetize blog content on various topics",
        difficulty="Medium",
        time_to_profit="6-12 months",
        startup_cost="$50-500",
        potential_income="$500-15K+/month",
        average_income=IncomeBands("$0-500/month", "$500-3K/month", "$3K-15K+/month"),
        tools=("WordPress", "Yoast SEO", "Mailchimp", "Canva", "Google Analytics"),
        skills=("Writing and editing", "SEO optimization", "Content strategy", "Social media marketing", "Email marketing"),
        profile=_profile(8, 50, 15000, 10, (2, 1, 3, 4, 2, 3, 5, 5, 2, 4, 4), 4, "solo"),
    ),
    BusinessModel(
        id="consulting",
        name="Consulting",
        emoji="💼",
        description="Provide expert advice and solutions to businesses or individuals",
        difficulty="Hard",
        time_to_profit="2-8 months",
        startup_cost="$0-2K",
        potential_income="$5K-50K+/month",
        average_income=IncomeBands("$2K-8K/month", "$8K-25K/month", "$25K-50K+/month"),
        tools=("Zoom", "Slack", "Notion", "PowerPoint", "Stripe"),
        skills=("Deep expertise in specific area", "Problem-solving", "Communication and presentation", "Project management", "Client relationship management"),
        profile=_profile(3, 0, 50000, 15, (3, 5, 3, 3, 3, 3, 4, 3, 4, 2, 4), 1, "solo", teaching=True),
    ),
    BusinessModel(
        id="print-on-demand",
        name="Print on Demand",
        emoji="🖼️",
        description="Create and sell custom designs on products without inventory management",
        difficulty="Medium",
        time_to_profit="1-2 weeks",
        startup_cost="$0-1K",
        potential_income="$200-10K+/month",
        average_income=IncomeBands("$50-500/month", "$500-3K/month", "$3K-10K+/month"),
        tools=("Canva", "Photoshop", "Printful", "Etsy", "Amazon Merch"),
        skills=("Graphic design", "Market research", "Trend awareness", "Basic marketing", "Brand development"),
        profile=_profile(
            0.5, 0, 10000, 5, (1, 1, 3, 5, 2, 3, 4, 4, 2, 3, 3), 4, "solo",
            physical_products=True,
        ),
    ),
    BusinessModel(
        id="real-estate-investing",
        name="Real Estate Investing",
        emoji="🏠",
        description="Invest in and manage real estate properties for profit",
        difficulty="Hard",
        time_to_profit="6-24 months",
        startup_cost="$10K-100K+",
        potential_income="$2K-50K+/month",
        average_income=IncomeBands("$1K-5K/month", "$5K-20K/month", "$20K-50K+/month"),
        tools=("Zillow", "BiggerPockets", "RentSpree", "QuickBooks", "Cozy"),
        skills=("Market analysis", "Financial modeling", "Property evaluation", "Negotiation", "Property management"),
        profile=_profile(12, 10000, 50000, 10, (2, 3, 2, 1, 5, 4, 4, 4, 3, 1, 5), 4, "mixed"),
    ),
    BusinessModel(
        id="online-course-creation",
        name="Online Course Creation",
        emoji="🎓",
        description="Create and sell online courses on platforms like Udemy or Teachable",
        difficulty="Medium",
        time_to_profit="2-12 months",
        startup_cost="$100-2K",
        potential_income="$1K-50K+/month",
        average_income=IncomeBands("$500-3K/month", "$3K-15K/month", "$15K-50K+/month"),
        tools=("Teachable", "Camtasia", "Loom", "Canva", "Mailchimp"),
        skills=("Subject matter expertise", "Content creation", "Video production", "Instructional design", "Marketing and sales"),
        profile=_profile(4, 100, 50000, 10, (4, 3, 3, 4, 3, 3, 4, 4, 4, 4, 4), 5, "solo", teaching=True),
    ),
    BusinessModel(
        id="ghostwriting",
        name="Ghostwriting",
        emoji="👻",
        description="Write content for others who are credited as the author",
        difficulty="Medium",
        time_to_profit="2-8 months",
        startup_cost="$0-300",
        potential_income="$3K-30K+/month",
        average_income=IncomeBands("$1K-5K/month", "$5K-15K/month", "$15K-30K+/month"),
        tools=("Google Docs", "Scrivener", "Zoom", "Trello", "PayPal"),
        skills=("Adaptable writing style", "Research capabilities", "Interview skills", "Project management", "Client collaboration"),
        profile=_profile(3, 0, 30000, 15, (1, 4, 2, 4, 2, 3, 4, 3, 2, 1, 3), 1, "solo"),
    ),
    BusinessModel(
        id="dropshipping",
        name="Dropshipping",
        emoji="🚚",
        description="Sell products online without holding inventory, using suppliers to fulfill orders",
        difficulty="Easy",
        time_to_profit="1-4 months",
        startup_cost="$100-2K",
        potential_income="$1K-20K+/month",
        average_income=IncomeBands("$500-3K/month", "$3K-10K/month", "$10K-20K+/month"),
        tools=("Shopify", "Oberlo", "AliExpress", "Facebook Ads", "Google Analytics"),
        skills=("Product research", "Digital marketing", "Customer service", "Website management", "Analytics understanding"),
        profile=_profile(
            2, 100, 20000, 10, (1, 1, 3, 2, 4, 3, 4, 4, 3, 2, 4), 3, "solo",
            physical_products=True,
        ),
    ),
]

_MODEL_LOOKUP: Dict[str, BusinessModel] = {model.id: model for model in _CATALOG}


def list_models() -> Sequence[BusinessModel]:
    """Return the catalog in its canonical order."""
    return tuple(_CATALOG)


def model_ids() -> Sequence[str]:
    return tuple(model.id for model in _CATALOG)


def get_model(model_id: str) -> BusinessModel:
    """Return a model by id; raises KeyError for unknown ids."""

    try:
        return _MODEL_LOOKUP[model_id]
    except KeyError:
        raise KeyError(f"unknown business model: {model_id}") from None

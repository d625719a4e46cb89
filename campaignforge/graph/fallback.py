"""
fallback.py
-----------
Deterministic, offline campaign synthesis.

This is the availability floor of the pipeline: when the model is down, its
output cannot be parsed, or anything unexpected happens, the caller still gets
a complete artifact built only from the subject name/category and, in guided
mode, the caller's own objective and success-definition text (verbatim).
Every call builds fresh containers, so callers may mutate the result.
"""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..models import GenerationRequest, GuidedInputs, Subject
from .subject import resolve_subject


def synthesize(subject: Subject, guided_inputs: Optional[GuidedInputs] = None) -> Dict[str, Any]:
    brand = subject.name
    category = subject.category
    objectives = guided_inputs.objectives if guided_inputs else None
    success_definition = guided_inputs.success_definition if guided_inputs else None

    return {
        "campaignSummary": {
            "overview": (
                f"This comprehensive {brand} campaign focuses on driving brand awareness, customer "
                "acquisition, and market share growth through an integrated omnichannel approach."
            ),
            "rationale": (
                f"{brand} needs to strengthen its market position in the competitive {category} "
                "landscape while building deeper customer relationships and sustainable growth."
            ),
            "approach": (
                "We'll execute a data-driven, multi-phase campaign combining digital marketing, "
                "content creation, influencer partnerships, and strategic PR to achieve maximum "
                "impact and measurable ROI."
            ),
        },
        "businessChallenge": {
            "objectives": [objectives] if objectives else [
                f"Increase {brand} brand awareness by 35% in target markets",
                "Drive customer acquisition through digital channels",
                "Enhance brand perception and emotional connection",
                "Boost market share in competitive landscape",
            ],
            "challenges": [
                "Increasing competition in digital space",
                "Evolving consumer preferences and behaviors",
                "Attribution and measurement complexity",
                "Budget allocation across multiple channels",
            ],
            "kpis": [
                "Brand Awareness: +35% unaided recall",
                "Customer Acquisition: 25% increase in new customers",
                "Engagement Rate: +40% across social platforms",
                "Conversion Rate: +20% from digital touchpoints",
            ],
        },
        "audience": {
            "primary": {
                "demographics": "Adults 25-45, household income £50K+, urban/suburban, college-educated",
                "psychographics": "Value-conscious, digitally savvy, quality-focused, socially aware consumers",
                "behaviors": (
                    "Active on social media, research before purchasing, influenced by peer reviews "
                    "and brand values"
                ),
            },
            "secondary": {
                "demographics": "Young professionals 22-35, diverse backgrounds, tech-enabled lifestyle",
                "psychographics": "Innovation-seeking, sustainability-minded, experience-driven",
                "behaviors": (
                    "Mobile-first, share brand experiences, advocate for brands that align with "
                    "personal values"
                ),
            },
        },
        "category": {
            "landscape": (
                f"The {category} market is highly competitive with both established players and "
                "emerging disruptors"
            ),
            "competitors": ["Market Leader A", "Challenger Brand B", "Emerging Player C"],
            "trends": [
                "Sustainability focus",
                "Digital transformation",
                "Personalization",
                "Direct-to-consumer growth",
            ],
            "opportunities": [
                "Untapped market segments",
                "New distribution channels",
                "Technology integration",
                "Partnership potential",
            ],
        },
        "productBrand": {
            "positioning": f"{brand} delivers premium quality and authentic value that enhances everyday life",
            "uniqueValue": "Combination of innovation, quality, and customer-centric approach",
            "brandPersonality": ["Authentic", "Innovative", "Reliable", "Customer-focused"],
            "coreMessage": f"{brand} - Where quality meets innovation for real life",
        },
        "culture": {
            "culturalMoments": [
                "Sustainability awareness month",
                "Digital wellness trends",
                "Community support movements",
            ],
            "socialTrends": [
                "Authentic brand storytelling",
                "User-generated content",
                "Social commerce growth",
            ],
            "relevantMovements": [
                "Environmental consciousness",
                "Local community support",
                "Digital accessibility",
            ],
            "timelyOpportunities": [
                "Q1 New Year motivation",
                "Spring renewal season",
                "Back-to-school period",
                "Holiday shopping",
            ],
        },
        "strategy": {
            "approach": "Integrated omnichannel campaign focusing on authentic storytelling and community building",
            "channels": [
                "Social Media",
                "Digital Advertising",
                "Content Marketing",
                "Influencer Partnerships",
                "Email Marketing",
                "PR",
            ],
            "timeline": "6-month campaign with quarterly optimization cycles",
            "phases": [
                {
                    "phase": "Awareness & Foundation",
                    "duration": "0-8 weeks",
                    "focus": "Brand awareness and audience education",
                    "tactics": ["Brand storytelling", "Content creation", "Social media launch", "PR outreach"],
                },
                {
                    "phase": "Engagement & Consideration",
                    "duration": "8-16 weeks",
                    "focus": "Drive engagement and consideration",
                    "tactics": [
                        "Influencer partnerships",
                        "User-generated content",
                        "Retargeting campaigns",
                        "Email nurturing",
                    ],
                },
                {
                    "phase": "Conversion & Advocacy",
                    "duration": "16-24 weeks",
                    "focus": "Convert prospects and build advocacy",
                    "tactics": [
                        "Conversion optimization",
                        "Customer testimonials",
                        "Referral programs",
                        "Community building",
                    ],
                },
            ],
        },
        "propositionPlatform": {
            "bigIdea": (
                f'"Real Solutions for Real Life" - {brand} understands and solves genuine customer challenges'
            ),
            "coreMessage": f"{brand} delivers practical innovation that makes life better",
            "supportingMessages": [
                "Quality you can trust in every interaction",
                "Innovation that serves real needs",
                "Community-focused brand values",
                "Sustainable practices for future generations",
            ],
            "tonalAttributes": ["Authentic", "Confident", "Approachable", "Solution-oriented"],
        },
        "keyDetails": {
            "budget": "£500K - £1M total campaign investment",
            "timeline": "6 months with 3 optimization checkpoints",
            "team": ["Campaign Manager", "Creative Director", "Digital Specialist", "Data Analyst", "Content Creator"],
            "resources": [
                "Creative agency partnership",
                "Influencer network",
                "Content production capabilities",
                "Analytics platform",
            ],
            "constraints": [
                "Seasonal market fluctuations",
                "Competitive response time",
                "Regulatory compliance requirements",
            ],
        },
        "ambition": {
            "primaryGoal": success_definition or (
                f"Establish {brand} as the preferred choice in the {category} category while building "
                "sustainable customer relationships"
            ),
            "successMetrics": [
                "Brand awareness increase of 35%",
                "Customer acquisition growth of 25%",
                "Social engagement rate improvement of 40%",
                "Customer lifetime value increase of 15%",
            ],
            "longTermVision": (
                f"Become the most trusted and innovative brand in {category}, known for "
                "customer-centricity and sustainable practices"
            ),
            "competitiveAdvantage": (
                "Deep customer understanding combined with agile innovation and authentic brand storytelling"
            ),
        },
        "thoughtStarters": {
            "creativeDirections": [
                "Real customer stories showcasing brand impact",
                "Behind-the-scenes content demonstrating brand values",
                "Interactive social campaigns encouraging participation",
                "Collaborative content with complementary brands",
            ],
            "activationIdeas": [
                "Limited-time product experiences in key markets",
                "Social media challenges with branded hashtags",
                "Partnership activations with local communities",
                "Exclusive member benefits and early access programs",
            ],
            "partnershipOpportunities": [
                "Complementary brand collaborations",
                "Influencer and creator partnerships",
                "Non-profit organization alliances",
                "Retail and distribution partnerships",
            ],
            "innovativeApproaches": [
                "AI-powered personalization at scale",
                "Augmented reality product experiences",
                "Sustainable packaging initiatives",
                "Community-driven product development",
            ],
        },
        "keyDeliverables": {
            "immediate": [
                "Campaign strategy document and creative brief",
                "Brand messaging framework and content guidelines",
                "Channel-specific tactical plans",
                "Measurement and analytics setup",
            ],
            "shortTerm": [
                "Creative asset development and production",
                "Campaign launch across all channels",
                "Influencer partnership execution",
                "Performance monitoring and optimization",
            ],
            "longTerm": [
                "Comprehensive campaign performance analysis",
                "Customer journey optimization recommendations",
                "Sustained brand community development",
                "Strategic recommendations for next phase",
            ],
            "measurables": [
                "Weekly performance dashboards",
                "Monthly strategic reviews and optimizations",
                "Quarterly business impact assessments",
                "Annual brand health tracking",
            ],
        },
    }


def synthesize_for_request(request: GenerationRequest) -> Dict[str, Any]:
    """Fallback built from the request alone (no lookup record)."""
    subject = resolve_subject(request.subject_context, request.subject_name)
    return synthesize(subject, request.guided_inputs)

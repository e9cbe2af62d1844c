"""Component templates used by the generation stage."""

from .models import ComponentMetadata, ComponentNode


def _node(kind: str, reason: str, **properties) -> ComponentNode:
    return ComponentNode(kind=kind, properties=properties, metadata=ComponentMetadata(reason=reason))


def _tier(id: str, name: str, price: int, description: str, features: list[tuple[str, bool]], cta: str, **extra):
    return {
        "id": id,
        "name": name,
        "price": price,
        "currency": "USD",
        "billingPeriod": "month",
        "description": description,
        "features": [{"text": text, "included": included} for text, included in features],
        "ctaText": cta,
        **extra,
    }


class Templates:
    """Component templates. Every call builds a fresh, unshared node."""

    @staticmethod
    def button(text: str = "Get Started", icon_only: bool = False) -> ComponentNode:
        if icon_only:
            return _node(
                "Button",
                "Icon-only call-to-action",
                variant="solid",
                color="primary",
                size="lg",
                iconOnly=True,
                leftIcon="arrow-right",
            )
        return _node("Button", "Primary call-to-action button", text=text, variant="solid", color="primary", size="lg")

    @staticmethod
    def card(variant: str = "elevated") -> ComponentNode:
        return _node(
            "Card",
            "Content container for hero or feature section",
            variant=variant,
            title="Welcome",
            content="Your content goes here. Describe your product or service.",
            hoverable=True,
            size="lg",
        )

    @staticmethod
    def pricing_table() -> ComponentNode:
        return _node(
            "PricingTable",
            "Pricing table for SaaS subscription plans",
            headline="Choose Your Plan",
            subheadline="Select the perfect plan for your needs",
            tiers=[
                _tier(
                    "starter",
                    "Starter",
                    9,
                    "Perfect for getting started",
                    [("5 Projects", True), ("Basic Support", True), ("1GB Storage", True), ("API Access", False)],
                    "Get Started",
                ),
                _tier(
                    "pro",
                    "Professional",
                    29,
                    "Best for professionals",
                    [("Unlimited Projects", True), ("Priority Support", True), ("10GB Storage", True), ("API Access", True)],
                    "Start Free Trial",
                    featured=True,
                    badge="Most Popular",
                ),
                _tier(
                    "enterprise",
                    "Enterprise",
                    99,
                    "For large organizations",
                    [
                        ("Unlimited Everything", True),
                        ("24/7 Support", True),
                        ("Unlimited Storage", True),
                        ("Custom Integrations", True),
                    ],
                    "Contact Sales",
                ),
            ],
            showBillingToggle=True,
            yearlyDiscount=20,
        )

    @staticmethod
    def dashboard() -> ComponentNode:
        return _node(
            "DashboardLayout",
            "Dashboard layout with navigation sidebar and header",
            sidebar={
                "title": "Dashboard",
                "navItems": [
                    {"id": "home", "label": "Home", "icon": "home", "href": "/", "active": True},
                    {"id": "analytics", "label": "Analytics", "icon": "bar-chart", "href": "/analytics"},
                    {"id": "projects", "label": "Projects", "icon": "folder", "href": "/projects"},
                    {"id": "settings", "label": "Settings", "icon": "settings", "href": "/settings"},
                ],
                "collapsible": True,
                "showUserProfile": True,
                "userInfo": {"name": "John Doe", "email": "john@example.com"},
            },
            showSidebar=True,
            header={"title": "Overview", "showSearch": True, "showNotifications": True, "showUserMenu": True},
            showHeader=True,
            pageTitle="Dashboard",
            contentPadding="md",
        )

    @staticmethod
    def chart() -> ComponentNode:
        months = ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
        values = [1200, 1900, 1500, 2400, 2100, 2800]
        return _node(
            "Chart",
            "Data visualization chart",
            type="line",
            title="Performance Overview",
            subtitle="Last 6 months",
            data=[{"name": month, "value": value} for month, value in zip(months, values)],
            showLegend=True,
            showGrid=True,
            animated=True,
            colorScheme="default",
        )

    @staticmethod
    def form() -> ComponentNode:
        return _node(
            "Form",
            "Contact or input form",
            title="Contact Us",
            description="Fill out the form below and we'll get back to you",
            fields=[
                {"id": "name", "name": "name", "type": "text", "label": "Full Name", "placeholder": "John Doe", "required": True},
                {
                    "id": "email",
                    "name": "email",
                    "type": "email",
                    "label": "Email",
                    "placeholder": "john@example.com",
                    "required": True,
                },
                {
                    "id": "message",
                    "name": "message",
                    "type": "textarea",
                    "label": "Message",
                    "placeholder": "How can we help?",
                    "required": True,
                },
            ],
            submitText="Send Message",
            showSubmitButton=True,
            showValidationOnBlur=True,
        )

    @staticmethod
    def modal() -> ComponentNode:
        return _node(
            "Modal",
            "Modal dialog for confirmations or focused content",
            title="Confirm Action",
            description="Are you sure you want to proceed?",
            variant="default",
            size="md",
            showCloseButton=True,
            primaryAction={"text": "Confirm", "variant": "solid"},
            secondaryAction={"text": "Cancel", "variant": "outline"},
            isOpen=True,
        )

    @staticmethod
    def testimonials() -> ComponentNode:
        return _node(
            "TestimonialSection",
            "Customer testimonials for social proof",
            headline="What Our Customers Say",
            subheadline="Don't just take our word for it",
            testimonials=[
                {
                    "id": "1",
                    "quote": "This product has completely transformed how we work. Highly recommended!",
                    "authorName": "Sarah Johnson",
                    "authorRole": "CEO",
                    "authorCompany": "TechCorp",
                    "rating": 5,
                },
                {
                    "id": "2",
                    "quote": "The best investment we've made this year. The results speak for themselves.",
                    "authorName": "Michael Chen",
                    "authorRole": "Director of Operations",
                    "authorCompany": "StartupXYZ",
                    "rating": 5,
                },
                {
                    "id": "3",
                    "quote": "Incredible support team and a product that just works. Love it!",
                    "authorName": "Emily Brown",
                    "authorRole": "Product Manager",
                    "authorCompany": "InnovateCo",
                    "rating": 5,
                },
            ],
            layout="grid",
            columns=3,
            showRatings=True,
            showAvatars=True,
            cardStyle="elevated",
        )

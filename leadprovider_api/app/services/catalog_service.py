"""
Static catalog of the services offered by the agency.

The catalog is defined once in code and is read-only at runtime.  Carts
store only service ids; orders copy the title and image at checkout.
"""

from typing import Dict, List, Optional

from ..schemas.catalog import ServiceOffering


CATALOG: tuple[ServiceOffering, ...] = (
    ServiceOffering(
        id=1,
        title="Data Appending Enrichment",
        description=(
            "You Have a Lead List need Enrich with data Or contact person Email. "
            "We can help you to Enrich your Data. If You have an Old lead list And "
            "need to Update data then we can replace it with Update data. We can also "
            "Provide Missing Data From Various Sources and Valid Sources. We charge per "
            "row only 15 cents."
        ),
        image="/images/services/service-1.png",
    ),
    ServiceOffering(
        id=2,
        title="Email Appending Enrichment",
        description=(
            "You Have a Lead List that needs Enrich with the Owner or Decision makers "
            "Name and Email. We Provide any Decision makers contact Details."
        ),
        image="/images/services/service-2.png",
    ),
    ServiceOffering(
        id=3,
        title="Prospect List Building",
        description=(
            "We Have Some Targeted Companies. We are looking for their Decision makers "
            "Contact Details. We are here to help you to reach your goal. I Can Provide "
            "Linkedin Lead Generation Data."
        ),
        image="/images/services/service-3.png",
    ),
    ServiceOffering(
        id=4,
        title="Any Industry Leads",
        description=(
            "Here we Ready to provide any industry data. You just tell us about your "
            "targeted Industry Locations and Title/Role. You will get 100% valid data. "
            "We provide 100% Data accuracy Guarantee with 99% Emails Delivery Guarantee."
        ),
        image="/images/services/service-4.png",
    ),
    ServiceOffering(
        id=5,
        title="Email Finding",
        description=(
            "Do You Have a List? And Looking For their Valid Emails. Here We can provide "
            "99% Delivery able Emails. Just Share your list with us. We provide valid "
            "emails for only 15 cents."
        ),
        image="/images/services/service-5.png",
    ),
    ServiceOffering(
        id=6,
        title="Direct Number Finding",
        description=(
            "We are looking For Contact Person Direct Dials Number and cell phone "
            "number/Mobile Number. Here We provide any contact person direct dials "
            "number and cell phone number at only 15 cents."
        ),
        image="/images/services/service-6.png",
    ),
    ServiceOffering(
        id=7,
        title="Skip Tracing",
        description=(
            "You only have a Person name and their Mailing address or home address. You "
            "are looking for their Cell/Direct phone number and Email. We can provide "
            "those contact details."
        ),
        image="/images/services/service-7.png",
    ),
)


class CatalogService:
    """Read-only access to the service catalog."""

    _by_id: Dict[int, ServiceOffering] = {offering.id: offering for offering in CATALOG}

    @classmethod
    def list_services(cls) -> List[ServiceOffering]:
        return list(CATALOG)

    @classmethod
    def get_service(cls, service_id: int) -> Optional[ServiceOffering]:
        return cls._by_id.get(service_id)

    @classmethod
    def resolve(cls, service_ids: List[int]) -> List[ServiceOffering]:
        """Map ids to offerings, silently dropping unknown ids."""
        return [cls._by_id[sid] for sid in service_ids if sid in cls._by_id]

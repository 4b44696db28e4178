"""Built-in embroidery option catalog.

Used when the live option source is unavailable so that pricing can proceed
without a connection. Records use the storefront API's raw shape and go
through the same normalization as live records.
"""

from typing import Any


def _record(
    option_id: str,
    name: str,
    description: str,
    price: float,
    category: str,
    level: str,
    stitches: int = 0,
    estimated_time: str = "0 days",
    popular: bool = False,
    default: bool = False,
    incompatible: tuple[str, ...] = (),
) -> dict[str, Any]:
    return {
        "id": option_id,
        "name": name,
        "description": description,
        "price": price,
        "stitches": stitches,
        "estimatedTime": estimated_time,
        "category": category,
        "level": level,
        "isPopular": popular,
        "isActive": True,
        "isSelected": default,
        "isIncompatible": list(incompatible),
    }


DEFAULT_OPTION_RECORDS: list[dict[str, Any]] = [
    # Coverage levels
    _record("coverage-50", "50% Coverage - Mostly Text",
            "Perfect for text-heavy designs with minimal graphics",
            0, "coverage", "basic", stitches=3000, estimated_time="1-2 days"),
    _record("coverage-75", "75% Coverage - Balanced",
            "Ideal balance of detail and cost for most designs",
            14.50, "coverage", "standard", stitches=6000, estimated_time="2-3 days", popular=True),
    _record("coverage-100", "100% Coverage - Most Detailed",
            "Full coverage embroidery for intricate, detailed designs",
            27.00, "coverage", "premium", stitches=10000, estimated_time="3-4 days"),

    # Base materials
    _record("material-polyester", "Polyester Blend Twill",
            "Standard, durable material perfect for most applications",
            0, "material", "basic", popular=True, default=True),
    _record("material-felt", "Felt",
            "Soft, unique texture that stands out from standard patches",
            12.78, "material", "standard"),
    _record("material-ballistic", "Black Ballistic Nylon",
            "Ultra-durable military-grade material for heavy use",
            69.90, "material", "luxury"),
    _record("material-camo", "Camouflage Material",
            "Tactical camo pattern for outdoor and military applications",
            26.63, "material", "premium"),
    _record("material-reflective", "Reflective Material (Silver)",
            "High-visibility reflective backing for safety applications",
            58.58, "material", "luxury"),

    # Border and edge
    _record("border-none", "No Border",
            "Clean cut edge without additional finishing",
            0, "border", "basic"),
    _record("border-embroidered", "Embroidered Border",
            "Classic embroidered edge that follows your design shape",
            0, "border", "standard", stitches=1000, estimated_time="1 day", popular=True, default=True),
    _record("border-merrowed", "Merrowed Border",
            "Professional overlock stitch for clean, finished edges",
            20.24, "border", "premium", estimated_time="1 day", incompatible=("border-embroidered",)),
    _record("border-frayed", "Frayed Edges",
            "Rustic, vintage look with intentionally frayed edges",
            20.24, "border", "premium", estimated_time="1 day"),

    # Threads
    _record("thread-standard", "Standard Thread (1-9 colors)",
            "High-quality polyester thread in standard colors",
            0, "threads", "basic", popular=True, default=True),
    _record("thread-extra", "Extra Thread Colors (10-12)",
            "Expanded color palette for complex designs",
            79.88, "threads", "standard"),
    _record("thread-many", "13+ Thread Colors",
            "Unlimited colors for the most detailed designs",
            127.80, "threads", "premium"),
    _record("thread-metallic", "Metallic Thread",
            "Shimmering metallic thread for eye-catching designs",
            38.34, "threads", "premium"),
    _record("thread-neon", "Neon Thread",
            "Bright, vibrant neon colors for maximum visibility",
            26.63, "threads", "standard"),
    _record("thread-glow-10", "Glow in the Dark (10%)",
            "Minimal glow elements for subtle night visibility",
            35.15, "threads", "premium"),
    _record("thread-glow-25", "Glow in the Dark (25%)",
            "Moderate glow coverage for enhanced visibility",
            63.90, "threads", "luxury"),
    _record("thread-glow-50", "Glow in the Dark (50%)",
            "Maximum glow coverage for dramatic night effects",
            99.05, "threads", "luxury"),
    _record("thread-puff", "Puff Embroidery (3D)",
            "Raised, three-dimensional embroidery effect",
            20.24, "threads", "premium", estimated_time="1 day"),

    # Backing
    _record("backing-none", "No Backing",
            "No additional backing applied",
            0, "backing", "basic", default=True),
    _record("backing-iron", "Iron-on Backing",
            "Heat-activated adhesive for easy application",
            0, "backing", "basic", popular=True),
    _record("backing-adhesive", "Adhesive Backing",
            "Peel-and-stick adhesive for quick application",
            12.78, "backing", "standard"),
    _record("backing-velcro-hook", "Velcro Hook Backing",
            "Hook-side Velcro for secure attachment",
            53.25, "backing", "premium"),
    _record("backing-velcro-loop", "Velcro Loop Backing",
            "Loop-side Velcro for soft attachment",
            46.86, "backing", "premium"),
    _record("backing-magnetic", "Magnetic Backing",
            "Magnetic backing for easy repositioning",
            35.15, "backing", "premium"),

    # Upgrades
    _record("upgrade-button-loop", "Button Loop",
            "Fabric loop for button attachment",
            20.24, "upgrades", "standard", popular=True),
    _record("upgrade-rhinestone", "Rhinestone Accents",
            "Sparkling rhinestone embellishments",
            260.93, "upgrades", "luxury", estimated_time="1 day"),

    # Cut to shape method
    _record("cutting-laser", "Laser Cut or Hand Cut",
            "Standard cutting method for basic shapes",
            0, "cutting", "basic", popular=True, default=True),
    _record("cutting-hot-cut", "Hot Cut Edge",
            "Precision cutting for complex shapes and irregular designs",
            20.24, "cutting", "premium", popular=True),
]

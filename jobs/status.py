from django.db import models


class MaterialStatus(models.TextChoices):
    NOT_NEEDED = 'not-needed', 'Not Needed'
    NOT_ORDERED = 'not-ordered', 'Not Ordered'
    ORDERED = 'ordered', 'Ordered'
    RECEIVED = 'received', 'Received'


class LaborStatus(models.TextChoices):
    NOT_NEEDED = 'not-needed', 'Not Needed'
    ESTIMATED = 'estimated', 'Estimated'
    COMPLETE = 'complete', 'Complete'


class PowderCoatStatus(models.TextChoices):
    NOT_NEEDED = 'not-needed', 'Not Needed'
    NOT_STARTED = 'not-started', 'Not Started'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETE = 'complete', 'Complete'


class RentalEquipmentStatus(models.TextChoices):
    NOT_NEEDED = 'not-needed', 'Not Needed'
    NOT_ORDERED = 'not-ordered', 'Not Ordered'
    ORDERED = 'ordered', 'Ordered'


class InstallationStatus(models.TextChoices):
    NOT_STARTED = 'not-started', 'Not Started'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETE = 'complete', 'Complete'


class TaskStatus(models.TextChoices):
    NOT_STARTED = 'not-started', 'Not Started'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETE = 'complete', 'Complete'


class AreaStatus(models.TextChoices):
    """Status rolled up from the tasks of one area."""
    NOT_NEEDED = 'not-needed', 'Not Needed'
    NOT_STARTED = 'not-started', 'Not Started'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETE = 'complete', 'Complete'


class PhaseState(models.TextChoices):
    PENDING = 'pending', 'Pending'
    IN_PROGRESS = 'in-progress', 'In Progress'
    COMPLETE = 'complete', 'Complete'


class Area(models.TextChoices):
    """The six checklist areas tracked on every phase."""
    WELDING_MATERIALS = 'welding_materials', 'Welding Materials'
    SEWING_MATERIALS = 'sewing_materials', 'Sewing Materials'
    WELDING_LABOR = 'welding_labor', 'Welding Labor'
    SEWING_LABOR = 'sewing_labor', 'Sewing Labor'
    INSTALLATION_MATERIALS = 'installation_materials', 'Installation Materials'
    POWDER_COAT = 'powder_coat', 'Powder Coat'


class TaskArea(models.TextChoices):
    WELDING_MATERIALS = 'welding_materials', 'Welding Materials'
    SEWING_MATERIALS = 'sewing_materials', 'Sewing Materials'
    WELDING_LABOR = 'welding_labor', 'Welding Labor'
    SEWING_LABOR = 'sewing_labor', 'Sewing Labor'
    INSTALLATION_MATERIALS = 'installation_materials', 'Installation Materials'
    POWDER_COAT = 'powder_coat', 'Powder Coat'
    INSTALLATION = 'installation', 'Installation'
    RENTAL_EQUIPMENT = 'rental_equipment', 'Rental Equipment'


class StatusTarget(models.TextChoices):
    """Sub-records of a phase whose status can be changed on its own."""
    WELDING_MATERIALS = 'welding_materials', 'Welding Materials'
    SEWING_MATERIALS = 'sewing_materials', 'Sewing Materials'
    WELDING_LABOR = 'welding_labor', 'Welding Labor'
    SEWING_LABOR = 'sewing_labor', 'Sewing Labor'
    INSTALLATION_MATERIALS = 'installation_materials', 'Installation Materials'
    POWDER_COAT = 'powder_coat', 'Powder Coat'
    INSTALLATION = 'installation', 'Installation'
    RENTAL_EQUIPMENT = 'installation.rental_equipment', 'Rental Equipment'


# Status vocabulary and default for each area record
AREA_VOCABULARY = {
    Area.WELDING_MATERIALS: MaterialStatus,
    Area.SEWING_MATERIALS: MaterialStatus,
    Area.INSTALLATION_MATERIALS: MaterialStatus,
    Area.WELDING_LABOR: LaborStatus,
    Area.SEWING_LABOR: LaborStatus,
    Area.POWDER_COAT: PowderCoatStatus,
}

AREA_DEFAULTS = {
    Area.WELDING_MATERIALS: MaterialStatus.NOT_ORDERED,
    Area.SEWING_MATERIALS: MaterialStatus.NOT_ORDERED,
    Area.INSTALLATION_MATERIALS: MaterialStatus.NOT_ORDERED,
    Area.WELDING_LABOR: LaborStatus.NOT_NEEDED,
    Area.SEWING_LABOR: LaborStatus.NOT_NEEDED,
    Area.POWDER_COAT: PowderCoatStatus.NOT_NEEDED,
}

RESOLVED_STATUSES = {
    MaterialStatus: {MaterialStatus.RECEIVED, MaterialStatus.NOT_NEEDED},
    LaborStatus: {LaborStatus.COMPLETE, LaborStatus.NOT_NEEDED},
    PowderCoatStatus: {PowderCoatStatus.COMPLETE, PowderCoatStatus.NOT_NEEDED},
}

"""
Asset field configuration.

Static tables used by the header mapper and the row cleaner:
target schemas, multilingual synonyms, header regexes, French stems,
excluded columns and the content rules used to fill unmapped critical fields.

Everything here is plain data, loaded once and never mutated.
"""

# =============================================================================
# TARGET SCHEMAS
# =============================================================================

IT_ASSET_FIELDS = (
    "device_type",
    "owner_name",
    "department",
    "zone",
    "serial_number",
    "ticket_number",
    "model",
    "brand",
    "date",
    "ram_gb",
    "disk_gb",
    "processor",
    "os",
    "peripheral_type",
    "connection_type",
    "status",
)

TELECOM_ASSET_FIELDS = (
    "provider",
    "sim_number",
    "sim_owner",
    "subscription_type",
    "date",
    "zone",
    "department",
    "data_plan",
    "status",
    "pin_code",
    "puk_code",
    "serial_number",
    "model",
    "brand",
    "imei",
    "location",
    "notes",
)

ASSET_FIELDS = {
    "it": IT_ASSET_FIELDS,
    "telecom": TELECOM_ASSET_FIELDS,
}

# Rows missing all of these are rejected (telecom also accepts any non-empty field)
ESSENTIAL_FIELDS = {
    "it": ("device_type", "model", "brand"),
    "telecom": ("provider", "sim_number", "sim_owner"),
}


# =============================================================================
# SYNONYMS (field -> known aliases, French and English)
# =============================================================================

FIELD_SYNONYMS = {
    # IT assets
    "device_type": (
        "type", "device", "equipment", "machine", "appareil", "équipement",
        "type_appareil", "type_équipement", "nature", "catégorie", "genre",
        "pc", "ordinateur", "laptop", "portable", "desktop", "serveur",
        "categorie", "type_machine", "type_pc", "type_ordinateur",
        "type_imprimante", "type_moniteur", "type_routeur", "type_switch",
        "typ", "equipement_type", "appareil_type", "machine_type",
        "categorie_equipement", "genre_equipement", "nature_equipement",
    ),
    "owner_name": (
        "owner", "user", "assigned_to", "responsable", "utilisateur",
        "nom", "nom_utilisateur", "propriétaire", "assigné", "attribué",
        "utilisateur_assigné", "responsable_équipement", "nom_propriétaire",
        "nom_assigné", "nom_attribué", "nom_responsable",
    ),
    "department": (
        "dept", "division", "service", "département", "departement",
        "direction", "secteur", "unité", "bureau", "section",
    ),
    "zone": (
        "location", "area", "site", "zone", "lieu", "emplacement",
        "localisation", "salle", "bureau", "étage", "bâtiment",
        "adresse", "position", "ville", "city", "town", "municipality",
        "municipalite",
    ),
    "serial_number": (
        "serial", "serial_no", "serial_number", "numéro_serie", "numero_serie",
        "numéro_de_série", "numero_de_serie", "n°_série", "n°_serie", "n_serie",
        "s/n", "s_n", "sn", "série", "serie", "numero", "numéro",
        "identifiant", "identifiant_serie", "id_serie", "serie_id",
        "numero_identifiant", "n°_identifiant", "n_identifiant",
    ),
    "model": (
        "model", "model_name", "model_number", "modèle", "modele",
        "référence", "reference", "ref", "réf", "version", "désignation",
        "designation", "nom_modèle", "nom_modele", "modele_nom",
        "version_modele", "ref_model", "model_ref", "reference_modele",
    ),
    "brand": (
        "brand", "manufacturer", "make", "marque", "fabricant",
        "constructeur", "producteur", "fournisseur", "origine",
        "marque_nom", "nom_marque", "fabricant_nom", "constructeur_nom",
        "marque_fabricant", "marque_constructeur",
    ),
    "ram_gb": (
        "ram", "memory", "mémoire", "memoire", "ram_gb", "memory_gb",
        "mémoire_ram", "mémoire_vive", "memoire_vive", "ram_mb", "ram_go",
        "mémoire_go",
    ),
    "disk_gb": (
        "disk", "storage", "hard_drive", "disque", "stockage", "disque_dur",
        "hdd", "ssd", "capacité", "espace", "disque_go", "stockage_go",
        "capacité_go",
    ),
    "processor": (
        "cpu", "chip", "processeur", "puce", "microprocesseur",
        "cpu_type", "type_cpu", "marque_cpu",
    ),
    "os": (
        "operating_system", "system", "système", "os",
        "système_exploitation", "systeme", "os_version", "version_os",
    ),
    "status": (
        "state", "condition", "état", "statut", "situation",
        "disponibilité", "fonctionnement",
    ),
    "ticket_number": (
        "ticket", "numéro_ticket", "numero_ticket", "n°_ticket",
        "ticket_no", "ticket_number", "demande", "incident",
    ),

    # Both schemas
    "date": (
        "date", "date_achat", "date_d_achat", "purchase_date", "date_acquisition",
        "acquisition_date", "date_activation", "activation_date",
        "date_mise_en_service", "mise_en_service", "date_attribution",
        "date_affectation", "date_livraison", "created", "created_at", "cree_le",
    ),

    # Telecom assets
    "provider": (
        "carrier", "operator", "opérateur", "operateur", "fournisseur",
        "opérateur_télécom", "opérateur_telecom", "fournisseur_service",
        "prestataire", "opérateur_mobile", "fournisseur_telecom",
        "opérateur_reseau", "iam", "inwi", "orange", "maroc_telecom",
        "meditel", "itissalat", "wana", "agence", "agence_commerciale",
        "commercial", "office",
    ),
    "sim_number": (
        "sim", "sim_card", "sim_id", "carte_sim", "numéro_sim", "numero_sim",
        "n°_sim", "n_sim", "iccid", "sim_number", "numero_carte_sim",
        "n°_carte_sim", "sim_iccid", "n°_tel", "n_tel", "tel", "telephone",
        "phone", "mobile", "portable", "gsm", "numero_telephone",
        "numero_tel", "n°_telephone", "contact", "numero_contact",
        "sim_numero",
    ),
    "sim_owner": (
        "sim_user", "card_owner", "propriétaire_sim", "proprietaire_sim",
        "utilisateur_sim", "utilisateur_carte", "titulaire_sim", "nom_sim",
        "propriétaire_carte", "nom_propriétaire_sim", "nom_utilisateur_sim",
        "nom_titulaire_sim", "utilisateur_nom", "titulaire_nom",
        "nom_utilisateur", "nom_propriétaire", "nom_titulaire",
        "nom", "name", "client", "customer", "utilisateur", "user",
    ),
    "subscription_type": (
        "plan", "subscription", "abonnement", "forfait", "type_abonnement",
        "type_forfait", "formule", "offre", "contrat", "plan_tarifaire",
        "type_plan", "type_subscription", "subscription_type", "tarif",
        "tarification", "postpaid", "prepaid", "prépayé", "postpayé",
        "business", "corporate", "entreprise", "professionnel",
    ),
    "data_plan": (
        "data", "internet", "données", "donnees", "forfait_data",
        "forfait_données", "connexion", "data_plan", "plan_données",
        "forfait_internet", "plan_internet", "plan_data", "internet_plan",
        "connexion_data", "1gb", "2gb", "5gb", "10gb", "20gb", "50gb",
        "unlimited", "illimité",
    ),
    "pin_code": (
        "pin", "code_pin", "pin_code", "pin_sim", "code_pin_sim",
        "n°_pin", "n_pin", "pin_carte", "sim_pin", "sim_code_pin",
    ),
    "puk_code": (
        "puk", "code_puk", "puk_code", "puk_sim", "code_puk_sim",
        "n°_puk", "n_puk", "puk_carte", "sim_puk", "sim_code_puk",
    ),
    "imei": (
        "imei", "imei_number", "numéro_imei", "numero_imei",
    ),
}


# =============================================================================
# HEADER PATTERNS (matched against the normalized header)
# =============================================================================

HEADER_PATTERNS = {
    "device_type": (
        r"^(type|kind|category|categorie|nature|equipment|equipement|device)$",
        r"^(pc|laptop|desktop|server|printer|monitor)$",
        r"^(computer|machine|appareil|type_appareil|type_equipement)$",
    ),
    "serial_number": (
        r"^(serial|sn|s_n|numero|id|identifier|identifiant)$",
        r"^(serial_number|serial_no|serialnumber)$",
        r"^(n_serie|no_serie|num_serie|numero_serie|numero_de_serie|serie)$",
    ),
    "model": (
        r"^(model|modele|reference|ref|version)$",
        r"^(model_name|model_number|modelname)$",
        r"^(designation|specification|spec)$",
    ),
    "brand": (
        r"^(brand|make|manufacturer|marque|fabricant)$",
        r"^(company|vendor|supplier|fournisseur|constructeur)$",
        r"^(origin|origine|producer|producteur)$",
    ),
    "owner_name": (
        r"^(owner|user|assigned|responsable|utilisateur)$",
        r"^(name|nom|proprietaire|nom_prenom|prenom_nom)$",
        r"^(assigned_to|assignedto|user_name|username)$",
    ),
    "department": (
        r"^(dept|department|departement|service|direction)$",
        r"^(division|unit|unite|section|bureau)$",
        r"^(team|group|equipe|groupe)$",
    ),
    "sim_number": (
        r"^(sim|sim_number|numero_sim|n_sim|iccid)$",
        r"^(tel|telephone|phone|mobile|gsm|n_tel|numero_tel|numero_telephone)$",
    ),
    "sim_owner": (
        r"^(sim_owner|titulaire|proprietaire_sim|titulaire_sim)$",
    ),
    "provider": (
        r"^(provider|operator|operateur|carrier|agence|agence_commerciale)$",
    ),
}

# Header shapes that earn a bonus during synonym scoring
HEADER_SHAPE_BONUS = {
    "device_type": (r"^(type|kind|category|categorie)$", 0.2),
    "serial_number": (r"^(serial|sn|id|n_serie)$", 0.2),
    "model": (r"^(model|modele|ref|version)$", 0.2),
    "brand": (r"^(brand|make|marque)$", 0.2),
}

# Sample value shapes that earn a bonus during synonym scoring
CONTENT_SHAPE_BONUS = {
    "serial_number": (r"^(sn-|serial|s/n)", 0.3),
    "device_type": (r"^(pc|laptop|desktop|server|printer)", 0.3),
}


# =============================================================================
# FRENCH STEMS (ordered: first hit wins)
# =============================================================================

FRENCH_HEADER_STEMS = (
    # Owner
    ("nom", "owner_name"),
    ("prenom", "owner_name"),
    ("utilisateur", "owner_name"),
    ("responsable", "owner_name"),
    ("proprietaire", "owner_name"),
    ("assigne", "owner_name"),
    ("attribue", "owner_name"),
    # Device type
    ("type", "device_type"),
    ("nature", "device_type"),
    ("categorie", "device_type"),
    ("genre", "device_type"),
    ("appareil", "device_type"),
    ("equipement", "device_type"),
    # Department
    ("departement", "department"),
    ("service", "department"),
    ("direction", "department"),
    ("unite", "department"),
    ("bureau", "department"),
    ("section", "department"),
    # Location
    ("zone", "zone"),
    ("lieu", "zone"),
    ("emplacement", "zone"),
    ("localisation", "zone"),
    ("salle", "zone"),
    ("etage", "zone"),
    ("batiment", "zone"),
    # Serial number
    ("numero", "serial_number"),
    ("serie", "serial_number"),
    ("numero_serie", "serial_number"),
    ("numero_de_serie", "serial_number"),
    ("n_serie", "serial_number"),
    ("s_n", "serial_number"),
    ("sn", "serial_number"),
    ("serial", "serial_number"),
    ("identifiant", "serial_number"),
    ("id", "serial_number"),
    # Model
    ("modele", "model"),
    ("reference", "model"),
    ("ref", "model"),
    ("nom_modele", "model"),
    ("version", "model"),
    ("designation", "model"),
    # Brand
    ("marque", "brand"),
    ("fabricant", "brand"),
    ("constructeur", "brand"),
    ("producteur", "brand"),
    ("fournisseur", "brand"),
    ("origine", "brand"),
    # Technical specs
    ("memoire", "ram_gb"),
    ("ram", "ram_gb"),
    ("disque", "disk_gb"),
    ("stockage", "disk_gb"),
    ("processeur", "processor"),
    ("cpu", "processor"),
    ("systeme", "os"),
    ("os", "os"),
    ("etat", "status"),
    ("statut", "status"),
    ("ticket", "ticket_number"),
    ("demande", "ticket_number"),
)

# Stems shorter than this only match the whole header, never a substring
FRENCH_STEM_MIN_CONTAINS_LENGTH = 3


# =============================================================================
# EXCLUDED AND NON-MEANINGFUL COLUMNS
# =============================================================================

# Normalized headers that are never mapped (counters, quantities, notes)
EXCLUDED_HEADERS = frozenset({
    "n_b",
    "nb",
    "quantite",
    "qte",
    "nombre",
    "count",
    "note",
    "notes",
    "comment",
    "comments",
    "commentaire",
    "commentaires",
    "remarque",
    "remarques",
    "observation",
    "observations",
})

NON_MEANINGFUL_HEADER_PATTERNS = (
    r"^(empty|blank|null|na|n_a)$",
    r"^(id|index|row|line|number)$",
    r"^(total|sum|count|quantity|qty)$",
)


# =============================================================================
# CONTENT FALLBACK FOR CRITICAL FIELDS
# =============================================================================

CRITICAL_FIELDS = {
    "telecom": (
        "sim_number", "sim_owner", "provider", "zone",
        "department", "subscription_type", "data_plan",
    ),
    "it": ("serial_number", "model", "brand", "zone"),
}

# (pattern, case_insensitive, confidence) per critical field
CONTENT_FALLBACK_RULES = {
    "telecom": {
        "sim_number": (r"^[0-9]{9,10}$", False, 0.9),
        "sim_owner": (r"^[A-Z\s]{5,30}$", False, 0.8),
        "provider": (r"^(iam|inwi|orange|maroc|meditel)", True, 0.9),
        "zone": (r"^[A-Za-z\s]{3,20}$", False, 0.8),
        "department": (r"^[A-Za-z\s]{3,20}$", False, 0.8),
        "subscription_type": (r"^(prepaid|postpaid|prepaye|postpaye|forfait|abonnement|monthly|mensuel)", True, 0.75),
        "data_plan": (r"^(\d+\s*(gb|go|mb|mo)|unlimited|illimite)$", True, 0.8),
    },
    "it": {
        "serial_number": (r"^(sn-|serial|s/n|[a-z0-9]{6,}$)", True, 0.8),
        "model": (r"^[a-z0-9\s\-_]{3,}$", True, 0.7),
        "brand": (r"^[a-z]{3,15}$", True, 0.7),
        "zone": (r"^[A-Za-z\s]{3,20}$", False, 0.7),
    },
}

LAST_RESORT_CONFIDENCE = 0.3


# =============================================================================
# CONFIDENCE LEVELS
# =============================================================================

EXACT_CONFIDENCE = 1.0
HEADER_PATTERN_CONFIDENCE = 0.9
SERIAL_CONTENT_CONFIDENCE = 0.85
MODEL_CONTENT_CONFIDENCE = 0.75
BRAND_CONTENT_CONFIDENCE = 0.7
SYNONYM_EXACT_CONFIDENCE = 0.98
SYNONYM_CONTAINS_CONFIDENCE = 0.85
FRENCH_STEM_CONFIDENCE = 0.8


# =============================================================================
# VALUE TYPES
# =============================================================================

NUMBER_FIELD_MARKERS = ("_gb", "ram", "disk", "memory", "storage")
NUMBER_HEADER_TOKENS = frozenset({"gb", "mb", "go", "mo"})
DATE_FIELD_MARKERS = ("date", "created", "updated")
DATE_HEADER_MARKERS = ("date", "cree", "modifie", "ajoute", "created", "updated")


# =============================================================================
# ROW DEFAULTS
# =============================================================================

IT_DEFAULTS = {
    "device_type": "Unknown",
    "status": "active",
    "department": "IT",
    "zone": "Office",
    "owner_name": "Unassigned",
}

TELECOM_DEFAULTS = {
    "provider": "Unknown",
    "status": "active",
    "department": "IT",
    "zone": "Office",
    "sim_owner": "Unassigned",
    "subscription_type": "Monthly",
    "data_plan": "Basic",
}

# (keywords, prefix) checked in order against the lowercased device type
DEVICE_PREFIXES = (
    (("pc", "ordinateur"), "PC"),
    (("laptop", "portable"), "LAP"),
    (("desktop", "bureau"), "DESK"),
    (("server", "serveur"), "SRV"),
    (("printer", "imprimante"), "PRT"),
    (("monitor", "moniteur"), "MON"),
    (("router", "routeur"), "RT"),
    (("switch",), "SW"),
)
DEFAULT_DEVICE_PREFIX = "DEV"

# (keywords, model, brand) checked in order against the lowercased device type
DEVICE_DESCRIPTIONS = (
    (("pc portable", "laptop"), "Laptop Computer", "Business Laptop"),
    (("pc", "ordinateur"), "Desktop Computer", "Business Desktop"),
    (("serveur", "server"), "Server System", "Enterprise Server"),
    (("imprimante", "printer"), "Network Printer", "Office Printer"),
    (("moniteur", "monitor"), "LCD Monitor", "Business Monitor"),
    (("routeur", "router"), "Network Router", "Network Equipment"),
    (("switch",), "Network Switch", "Network Equipment"),
)
DEFAULT_BRAND_DESCRIPTION = "Business Equipment"


# =============================================================================
# WORKBOOK HEADER DETECTION
# =============================================================================

HEADER_ROW_KEYWORDS = (
    "nom", "tel", "ville", "departement", "agence", "device", "serial",
    "brand", "owner", "model", "ram", "disk", "processor", "operating",
    "status", "created", "type", "marque", "serie",
)

"""
Ingredient classification by keyword lookup with a pattern fallback.

Classification runs in two tiers:
1. Substring lookup against the category keyword lists, in CATEGORY_ORDER.
   The first category with any keyword contained in the name wins.
2. If nothing matched, regex patterns built from the same keyword lists
   plus generic cues per category, in FALLBACK_ORDER.

All tables are immutable module constants and the fallback patterns are
compiled once at import time, so classify_ingredient is a pure function.
"""
import logging
import re
from types import MappingProxyType
from typing import List, Mapping, Tuple

from recipe_etl.engine.parsing.models import IngredientKind

logger = logging.getLogger(__name__)

# Category keyword lists. Order inside a list does not matter; order across
# categories is CATEGORY_ORDER below.
INGREDIENT_KEYWORDS: Mapping[IngredientKind, Tuple[str, ...]] = MappingProxyType({
    # Meat, poultry, game
    IngredientKind.PROTEIN_MAIN: (
        "chicken", "beef", "pork", "lamb", "turkey", "duck", "goose", "venison",
        "bacon", "ham", "sausage", "pepperoni", "salami", "prosciutto", "chorizo",
        "brisket", "ribs", "steak", "chop", "cutlet", "tenderloin", "roast",
        "ground beef", "ground pork", "ground turkey", "ground chicken", "mince",
        "poultry", "game", "rabbit", "bison", "elk", "boar",
    ),
    # Fish, seafood, plant-based proteins
    IngredientKind.PROTEIN_SOURCE: (
        "fish", "salmon", "tuna", "cod", "halibut", "shrimp", "crab", "lobster",
        "scallops", "mussels", "clams", "oysters", "tofu", "tempeh", "seitan",
        "mackerel", "sardines", "anchovy", "anchovies", "trout", "bass", "snapper",
        "tilapia", "prawns", "crayfish", "crawfish", "squid", "octopus", "calamari",
        "lentils", "chickpeas", "garbanzo", "black beans", "kidney beans", "pinto beans",
        "navy beans", "lima beans", "edamame", "quinoa", "hemp seeds", "chia seeds",
        "nutritional yeast", "protein powder", "whey", "casein",
    ),
    # Vegetables and fresh herbs
    IngredientKind.VEGETABLE: (
        "onion", "garlic", "tomato", "pepper", "carrot", "celery", "lettuce",
        "spinach", "broccoli", "cauliflower", "mushroom", "potato", "sweet potato",
        "corn", "peas", "beans", "cucumber", "zucchini", "squash", "eggplant",
        "bell pepper", "jalapeño", "chili pepper", "cabbage", "kale", "arugula",
        "asparagus", "artichoke", "avocado", "beet", "beets", "beetroot", "radish",
        "turnip", "rutabaga", "parsnip", "leek", "shallot", "scallion", "green onion",
        "spring onion", "chive", "chives", "herbs", "cilantro", "parsley", "basil",
        "oregano", "thyme", "rosemary", "sage", "mint", "dill", "tarragon",
        "fennel", "endive", "escarole", "radicchio", "watercress", "mizuna",
        "bok choy", "napa cabbage", "daikon", "jicama", "kohlrabi", "okra",
        "brussels sprouts", "collard greens", "mustard greens", "chard", "beet greens",
        "rocket", "mesclun", "mache", "frisee", "iceberg", "romaine",
        "butter lettuce", "bibb lettuce", "red leaf", "green leaf",
        "microgreens", "sprouts", "alfalfa", "mung bean sprouts", "broccoli sprouts",
    ),
    # Grains, starches, breads, pastas
    IngredientKind.GRAIN: (
        "rice", "pasta", "noodles", "bread", "flour", "oats", "quinoa", "barley",
        "wheat", "buckwheat", "millet", "couscous", "bulgur", "crackers", "cereal",
        "brown rice", "white rice", "wild rice", "jasmine rice", "basmati rice",
        "arborio rice", "sushi rice", "sticky rice", "black rice", "red rice",
        "spaghetti", "penne", "rigatoni", "fettuccine", "linguine", "macaroni",
        "lasagna", "ravioli", "tortellini", "gnocchi", "ramen", "soba", "udon",
        "rice noodles", "vermicelli", "angel hair", "fusilli", "rotini", "ziti",
        "breadcrumbs", "panko", "croutons", "tortilla", "pita", "naan", "bagel",
        "muffin", "biscuit", "scone", "croissant", "baguette", "sourdough",
        "rye bread", "whole wheat", "multigrain", "sprouted", "gluten-free bread",
        "cornmeal", "polenta", "grits", "semolina", "farro", "spelt", "kamut",
        "amaranth", "teff", "sorghum", "triticale", "rye", "steel cut oats",
        "rolled oats", "instant oats", "granola", "muesli",
    ),
    # Milk products, cheeses, fermented dairy
    IngredientKind.DAIRY: (
        "milk", "cheese", "butter", "cream", "yogurt", "sour cream", "buttermilk",
        "margarine", "heavy cream", "half and half", "ricotta", "cottage cheese",
        "mozzarella", "cheddar", "parmesan", "feta", "goat cheese", "brie", "camembert",
        "gouda", "swiss", "provolone", "monterey jack", "colby", "pepper jack",
        "blue cheese", "gorgonzola", "roquefort", "stilton", "cream cheese", "mascarpone",
        "kefir", "greek yogurt", "skyr", "quark", "fromage blanc", "creme fraiche",
        "ice cream", "gelato", "sorbet", "frozen yogurt",
    ),
    # Oils and fats
    IngredientKind.FAT: (
        "oil", "olive oil", "vegetable oil", "coconut oil", "butter", "margarine",
        "lard", "shortening", "ghee", "avocado oil", "sesame oil", "canola oil",
        "sunflower oil", "safflower oil", "peanut oil", "walnut oil", "almond oil",
        "hazelnut oil", "pistachio oil", "macadamia oil", "grapeseed oil",
        "rice bran oil", "palm oil", "palm kernel oil", "cottonseed oil",
        "soybean oil", "corn oil", "flaxseed oil", "hemp oil", "argan oil",
        "truffle oil", "chili oil", "garlic oil", "herb oil", "infused oil",
        "bacon fat", "duck fat", "chicken fat", "beef tallow", "schmaltz",
    ),
    # Dried herbs, spices, seasonings, sweeteners, acids
    IngredientKind.SPICE: (
        "salt", "pepper", "garlic powder", "onion powder", "paprika", "cumin",
        "oregano", "basil", "thyme", "rosemary", "sage", "parsley", "cilantro",
        "dill", "chives", "bay leaves", "vanilla", "cinnamon", "nutmeg", "ginger",
        "turmeric", "cayenne", "red pepper flakes", "black pepper", "white pepper",
        "pink pepper", "green pepper", "allspice", "cardamom", "cloves", "star anise",
        "fennel seeds", "caraway seeds", "mustard seeds", "poppy seeds", "sesame seeds",
        "sunflower seeds", "pumpkin seeds", "chia seeds", "flax seeds", "hemp seeds",
        "coriander", "cilantro seeds", "dill seeds", "anise", "licorice", "tarragon",
        "marjoram", "savory", "sumac", "za'atar", "herbes de provence", "italian seasoning",
        "poultry seasoning", "pumpkin pie spice", "apple pie spice", "chai spice",
        "five spice", "seven spice", "berbere", "harissa", "ras el hanout",
        "jerk seasoning", "cajun seasoning", "old bay", "taco seasoning", "chili powder",
        "smoked paprika", "sweet paprika", "hot paprika", "chipotle", "jalapeño powder",
        "habanero powder", "ghost pepper", "scotch bonnet", "piri piri", "sriracha",
        "sambal oelek", "gochujang", "miso", "tamari", "soy sauce", "worcestershire",
        "fish sauce", "oyster sauce", "hoisin sauce", "teriyaki sauce", "ponzu",
        "mirin", "sake", "rice vinegar", "balsamic vinegar", "apple cider vinegar",
        "white vinegar", "red wine vinegar", "sherry vinegar", "champagne vinegar",
        "lemon juice", "lime juice", "orange juice", "grapefruit juice", "pomegranate juice",
        "tamarind", "date syrup", "maple syrup", "honey", "agave", "molasses",
        "brown sugar", "white sugar", "powdered sugar", "coconut sugar", "turbinado",
        "demerara", "muscovado", "jaggery", "palm sugar", "stevia", "monk fruit",
        "xylitol", "erythritol", "sorbitol", "maltitol", "saccharin", "aspartame",
    ),
    # Fresh and dried fruits, fruit products
    IngredientKind.FRUIT: (
        "apple", "banana", "orange", "lemon", "lime", "grapefruit", "strawberry",
        "blueberry", "raspberry", "blackberry", "cranberry", "cherry", "grape",
        "peach", "pear", "plum", "apricot", "nectarine", "pineapple", "mango",
        "papaya", "kiwi", "passion fruit", "dragon fruit", "pomegranate", "fig",
        "date", "raisin", "prune", "coconut", "avocado", "tomato", "cucumber",
        "watermelon", "cantaloupe", "honeydew", "persimmon", "guava", "lychee",
        "rambutan", "durian", "jackfruit", "breadfruit", "plantain",
        "dried fruit", "fruit leather", "jam", "jelly", "marmalade", "preserves",
        "compote", "chutney", "relish", "pickled fruit", "candied fruit",
    ),
    # Nuts, seeds, nut butters, nut milks
    IngredientKind.NUTS_SEEDS: (
        "almond", "walnut", "pecan", "hazelnut", "pistachio", "cashew", "macadamia",
        "brazil nut", "pine nut", "peanut", "sunflower seed", "pumpkin seed",
        "sesame seed", "chia seed", "flax seed", "hemp seed", "poppy seed",
        "caraway seed", "fennel seed", "mustard seed", "coriander seed",
        "nut butter", "peanut butter", "almond butter", "cashew butter",
        "sunflower butter", "tahini", "halva", "nut milk", "almond milk",
        "coconut milk", "oat milk", "soy milk", "rice milk", "hemp milk",
    ),
    # Sauces, dressings, spreads, pickled items
    IngredientKind.CONDIMENTS: (
        "ketchup", "mustard", "mayonnaise", "ranch", "blue cheese dressing",
        "caesar dressing", "italian dressing", "vinaigrette", "balsamic glaze",
        "hot sauce", "tabasco", "sriracha", "chili sauce", "barbecue sauce",
        "teriyaki sauce", "soy sauce", "worcestershire sauce", "fish sauce",
        "oyster sauce", "hoisin sauce", "sweet and sour sauce", "duck sauce",
        "plum sauce", "tartar sauce", "cocktail sauce", "horseradish sauce",
        "aioli", "pesto", "chimichurri", "salsa", "guacamole", "hummus",
        "tzatziki", "tahini", "miso paste", "wasabi", "pickled ginger",
        "capers", "olives", "pickles", "relish", "chutney", "preserves",
    ),
})

# Exact-lookup iteration order; earlier categories win ties.
CATEGORY_ORDER: Tuple[IngredientKind, ...] = (
    IngredientKind.PROTEIN_MAIN,
    IngredientKind.PROTEIN_SOURCE,
    IngredientKind.VEGETABLE,
    IngredientKind.GRAIN,
    IngredientKind.DAIRY,
    IngredientKind.FAT,
    IngredientKind.SPICE,
    IngredientKind.FRUIT,
    IngredientKind.NUTS_SEEDS,
    IngredientKind.CONDIMENTS,
)

# Generic cues per fallback group, added to the keyword-derived patterns
GENERAL_CUES: Mapping[IngredientKind, Tuple[str, ...]] = MappingProxyType({
    IngredientKind.PROTEIN_MAIN: (
        r"meat|poultry|game|protein",
        r"steak|chop|cutlet|tenderloin|roast|brisket|ribs",
        r"ground|mince",
    ),
    IngredientKind.VEGETABLE: (
        r"vegetable|veggie|greens|leafy",
        r"root|bulb|tuber|stalk|stem",
        r"cruciferous|allium|nightshade",
        r"sprout|shoot|bud|flower",
    ),
    IngredientKind.FRUIT: (
        r"berry|fruit|citrus|tropical",
        r"dried fruit|jam|jelly|marmalade",
        r"compote|chutney|preserve",
    ),
    IngredientKind.GRAIN: (
        r"grain|cereal|starch|carb",
        r"bread|pasta|noodle|rice",
        r"flour|meal|bran|germ",
        r"cracker|biscuit|muffin",
    ),
    IngredientKind.DAIRY: (
        r"dairy|milk|cream|cheese|yogurt",
        r"butter|margarine|kefir",
        r"fermented|cultured|probiotic",
    ),
    IngredientKind.FAT: (
        r"oil|fat|grease|tallow|lard",
        r"shortening|ghee|schmaltz",
    ),
    IngredientKind.SPICE: (
        r"spice|herb|seasoning|flavor",
        r"powder|ground|dried|fresh",
        r"extract|essence|aroma",
        r"sauce|paste|condiment",
        r"vinegar|juice|syrup",
    ),
    IngredientKind.NUTS_SEEDS: (
        r"nut|seed|kernel",
        r"butter|paste|milk",
        r"tahini|halva",
    ),
    IngredientKind.CONDIMENTS: (
        r"sauce|dressing|dip|spread",
        r"pickle|relish|chutney",
        r"ketchup|mustard|mayo",
        r"hot sauce|barbecue|teriyaki",
    ),
})

# Fallback groups in priority order. Protein patterns draw on both protein
# keyword lists and resolve to protein_main.
FALLBACK_ORDER: Tuple[Tuple[IngredientKind, Tuple[IngredientKind, ...]], ...] = (
    (IngredientKind.PROTEIN_MAIN, (IngredientKind.PROTEIN_MAIN, IngredientKind.PROTEIN_SOURCE)),
    (IngredientKind.VEGETABLE, (IngredientKind.VEGETABLE,)),
    (IngredientKind.FRUIT, (IngredientKind.FRUIT,)),
    (IngredientKind.GRAIN, (IngredientKind.GRAIN,)),
    (IngredientKind.DAIRY, (IngredientKind.DAIRY,)),
    (IngredientKind.FAT, (IngredientKind.FAT,)),
    (IngredientKind.SPICE, (IngredientKind.SPICE,)),
    (IngredientKind.NUTS_SEEDS, (IngredientKind.NUTS_SEEDS,)),
    (IngredientKind.CONDIMENTS, (IngredientKind.CONDIMENTS,)),
)


def build_keyword_patterns(keywords: Tuple[str, ...]) -> List[re.Pattern]:
    """
    Build word-bounded alternations from a keyword list.

    Keywords are bucketed by length (<=3, 4-8, >8 characters) so each
    alternation stays small.
    """
    buckets = (
        [k for k in keywords if len(k) <= 3],
        [k for k in keywords if 3 < len(k) <= 8],
        [k for k in keywords if len(k) > 8],
    )
    return [
        re.compile(r"\b(" + "|".join(re.escape(k) for k in bucket) + r")\b", re.IGNORECASE)
        for bucket in buckets
        if bucket
    ]


def _build_fallback_patterns() -> Tuple[Tuple[IngredientKind, Tuple[re.Pattern, ...]], ...]:
    compiled = []
    for kind, sources in FALLBACK_ORDER:
        keywords: Tuple[str, ...] = ()
        for source in sources:
            keywords += INGREDIENT_KEYWORDS[source]
        patterns = build_keyword_patterns(keywords)
        patterns.extend(re.compile(cue, re.IGNORECASE) for cue in GENERAL_CUES[kind])
        compiled.append((kind, tuple(patterns)))
    return tuple(compiled)


FALLBACK_PATTERNS = _build_fallback_patterns()


def _match_keywords(name: str) -> IngredientKind:
    for kind in CATEGORY_ORDER:
        if any(keyword in name for keyword in INGREDIENT_KEYWORDS[kind]):
            return kind
    return IngredientKind.OTHER


def _match_patterns(name: str) -> IngredientKind:
    for kind, patterns in FALLBACK_PATTERNS:
        if any(pattern.search(name) for pattern in patterns):
            return kind
    return IngredientKind.OTHER


def classify_ingredient(name: str) -> IngredientKind:
    """
    Assign a category to a cleaned ingredient name.

    Examples:
        "ground beef" -> IngredientKind.PROTEIN_MAIN
        "firmly packed brown sugar" -> IngredientKind.SPICE
        "mystery powder" -> IngredientKind.SPICE (via the fallback patterns)
        "water" -> IngredientKind.OTHER
    """
    if not name or not isinstance(name, str) or not name.strip():
        return IngredientKind.OTHER

    name_lower = name.lower().strip()

    kind = _match_keywords(name_lower)
    if kind is not IngredientKind.OTHER:
        return kind

    kind = _match_patterns(name_lower)
    if kind is IngredientKind.OTHER:
        logger.debug(f"No category for ingredient '{name_lower}', defaulting to other")
    return kind

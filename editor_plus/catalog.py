"""
Static catalogs exposed to the admin UI: block types, removable block classes,
pattern categories, and the selector reference shown next to the code editors.
"""

BLOCK_TYPES: dict = {
    # Text
    "core/paragraph":    "Paragraph",
    "core/heading":      "Heading",
    "core/list":         "List",
    "core/list-item":    "List Item",
    "core/quote":        "Quote",
    "core/pullquote":    "Pullquote",
    "core/code":         "Code",
    "core/preformatted": "Preformatted",
    "core/verse":        "Verse",
    "core/details":      "Details",
    # Media
    "core/image":        "Image",
    "core/gallery":      "Gallery",
    "core/audio":        "Audio",
    "core/video":        "Video",
    "core/cover":        "Cover",
    "core/file":         "File",
    "core/media-text":   "Media & Text",
    # Design
    "core/buttons":      "Buttons",
    "core/button":       "Button",
    "core/columns":      "Columns",
    "core/column":       "Column",
    "core/group":        "Group",
    "core/row":          "Row",
    "core/stack":        "Stack",
    "core/separator":    "Separator",
    "core/spacer":       "Spacer",
    # Data
    "core/table":        "Table",
    # Widgets
    "core/search":          "Search",
    "core/archives":        "Archives",
    "core/categories":      "Categories",
    "core/latest-posts":    "Latest Posts",
    "core/latest-comments": "Latest Comments",
    "core/calendar":        "Calendar",
    "core/tag-cloud":       "Tag Cloud",
    "core/social-links":    "Social Icons",
    "core/social-link":     "Social Icon",
    # Theme
    "core/navigation":          "Navigation",
    "core/navigation-link":     "Navigation Link",
    "core/site-logo":           "Site Logo",
    "core/site-title":          "Site Title",
    "core/site-tagline":        "Site Tagline",
    "core/query":               "Query Loop",
    "core/post-template":       "Post Template",
    "core/post-title":          "Post Title",
    "core/post-content":        "Post Content",
    "core/post-excerpt":        "Post Excerpt",
    "core/post-featured-image": "Featured Image",
    "core/post-date":           "Post Date",
    "core/post-author":         "Post Author",
    "core/post-terms":          "Post Terms",
    # Embeds
    "core/embed": "Embed",
    "core/html":  "Custom HTML",
}

# Class names a block type prints on the frontend, e.g. core/image → wp-block-image
BLOCK_CLASSES: dict = {
    f"wp-block-{name.split('/', 1)[1]}": f"{label} (.wp-block-{name.split('/', 1)[1]})"
    for name, label in BLOCK_TYPES.items()
    if name not in {
        "core/list-item", "core/details", "core/latest-comments", "core/social-link",
        "core/navigation-link", "core/query", "core/post-template", "core/post-terms",
        "core/embed", "core/html",
    }
}

PATTERN_CATEGORY = "abe-custom"
PATTERN_CATEGORY_LABEL = "Block Editor+ Patterns"

PATTERN_CATEGORIES: dict = {
    "text":           "Text",
    "media":          "Media",
    "columns":        "Columns",
    "header":         "Header",
    "footer":         "Footer",
    "gallery":        "Gallery",
    "call-to-action": "Call to Action",
    "testimonial":    "Testimonial",
    "team":           "Team",
    "pricing":        "Pricing",
    "contact":        "Contact",
    "featured":       "Featured",
}

CSS_SELECTORS: dict = {
    "layout": {
        ".wp-site-blocks":        "Site wrapper",
        ".entry-content":         "Post/page content",
        ".wp-block-post-content": "Post content block",
    },
    "blocks": {
        ".wp-block-paragraph":    "Paragraph block",
        ".wp-block-heading":      "Heading block",
        ".wp-block-image":        "Image block",
        ".wp-block-columns":      "Columns block",
        ".wp-block-group":        "Group block",
        ".wp-block-button__link": "Button link",
    },
    "editor": {
        ".editor-styles-wrapper":           "Editor content area",
        ".block-editor-block-list__layout": "Block list",
        ".is-root-container":               "Root container",
        ".wp-block.is-selected":            "Selected block",
    },
}

CATALOGS: dict = {
    "block-types":        BLOCK_TYPES,
    "block-classes":      BLOCK_CLASSES,
    "pattern-categories": PATTERN_CATEGORIES,
    "css-selectors":      CSS_SELECTORS,
}

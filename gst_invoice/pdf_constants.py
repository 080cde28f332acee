"""Fixed geometry and colors of the tax invoice template (points, top-left origin)."""

PAGE_W = 595.28
PAGE_H = 841.89

MARGIN = 40.0
CONTENT_W = PAGE_W - 2 * MARGIN
X_LEFT = MARGIN
X_RIGHT = PAGE_W - MARGIN
X_MID = PAGE_W / 2.0

BLOCK_GAP = 12.0

# Header bar
HEADER_H = 34.0
HEADER_RADIUS = 6.0

# Party block
PARTY_COL_W = CONTENT_W / 2.0 - 10.0
PARTY_LABEL_H = 16.0
PARTY_LINE_H = 13.0

# Invoice number / date bar
INFO_BAR_H = 22.0
INFO_BAR_RADIUS = 4.0

# Tables
TABLE_HEAD_H = 20.0
TABLE_ROW_H = 17.0
TABLE_CELL_PAD = 4.0
TABLE_LINE_W = 0.5
SUMMARY_TABLE_INDENT = 20.0
SUMMARY_TABLE_W = 330.0

# Summary and tax breakdown boxes
SUMMARY_LINE_H = 14.0
SUMMARY_LINES = 4
BOX_PAD = 8.0
BOX_RADIUS = 5.0
BOX_LINE_W = 0.8
SUMMARY_BOX_W = 220.0
BREAKDOWN_BOX_W = 170.0

# Amount in words
WORDS_LINE_H = 13.0

# Signature and footer
SIGNATURE_SPACE = 36.0
SIGNATURE_RULE_W = 150.0
FOOTER_RULE_Y = PAGE_H - 48.0
FOOTER_TEXT_Y = PAGE_H - 30.0

FONT_SIZE_TITLE = 18
FONT_SIZE_NORMAL = 10
FONT_SIZE_SMALL = 9
FONT_SIZE_TABLE = 8

COLOR_ACCENT = (41, 128, 185)
COLOR_LIGHT = (245, 245, 245)
COLOR_TEXT = (50, 50, 50)
COLOR_GRID = (220, 220, 220)
COLOR_WHITE = (255, 255, 255)

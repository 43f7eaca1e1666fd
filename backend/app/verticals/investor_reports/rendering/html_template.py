"""Jinja2 template for one paginated investor table document."""

REPORT_HTML_TEMPLATE = """<!DOCTYPE html>
<html dir="rtl" lang="ar">
<head>
    <meta charset="UTF-8">
    <style>
        body { margin: 0; padding: 0; display: block; background: #fff; font-family: Arial, sans-serif; }
        table { border-collapse: collapse; width: 100%; direction: rtl; margin-top: 10px; }
        td { word-wrap: break-word; }
        .page-footer {
            position: fixed;
            bottom: 0;
            left: 0;
            right: 0;
            width: 100%;
            margin: 0;
            padding: 0;
            font-size: 0;
            line-height: 0;
        }
        .header-missing { font-size: 24px; font-weight: bold; color: firebrick; text-align: center; }
        @media print {
            body { -webkit-print-color-adjust: exact; print-color-adjust: exact; }
            @page { size: A4 portrait; margin: 0; }
            .break-avoid { page-break-inside: avoid; }
        }
    </style>
</head>
<body>
    <div style="width: 100%; max-width: 190mm; margin: 0 auto; padding-bottom: 30mm;">
        <div style="width: 100%; margin-bottom: 20px;">
            {% if assets.has_header %}
            <img src="data:image/png;base64,{{ assets.header_base64 }}" style="width: 100%; height: auto;" />
            {% else %}
            <div class="header-missing">{{ header_placeholder }}</div>
            {% endif %}
        </div>
        <table>
            {% for row in table.rows %}
            <tr>
                {% for cell in row %}
                <td{% if cell.row_span > 1 %} rowspan="{{ cell.row_span }}"{% endif %}{% if cell.col_span > 1 %} colspan="{{ cell.col_span }}"{% endif %} style="{{ css(cell.style) }}">{{ cell.text }}</td>
                {% endfor %}
            </tr>
            {% endfor %}
        </table>
    </div>
    {% if assets.has_footer %}
    <div class="page-footer">
        <img src="data:image/jpeg;base64,{{ assets.footer_base64 }}" style="width: 100%; height: auto; display: block;" />
    </div>
    {% endif %}
</body>
</html>
"""

HEADER_PLACEHOLDER = "HEADER IMAGE NOT FOUND (header.png)"

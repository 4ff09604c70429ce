"""Custom CSS styling for the RPP Copilot Gradio UI"""

custom_css = """
/* ROOT VARIABLES */
:root {
    --bg-primary: #f3f4f6;
    --bg-secondary: #ffffff;
    --border-color: #e5e7eb;
    --text-primary: #1f2937;
    --text-secondary: #6b7280;
    --accent-teal: #0d9488;
    --accent-red: #b91c1c;
    --radius-md: 12px;
}

.gradio-container {
    max-width: 1400px !important;
    margin: 0 auto !important;
    background: var(--bg-primary) !important;
}

footer { visibility: hidden !important; }

/* FORM */
#rpp-form {
    background: var(--bg-secondary) !important;
    border-radius: var(--radius-md) !important;
    padding: 16px !important;
    max-height: 85vh !important;
    overflow-y: auto !important;
}

/* RESULT */
#rpp-result {
    background: var(--bg-secondary) !important;
    border-radius: var(--radius-md) !important;
    padding: 16px !important;
    max-height: 85vh !important;
    overflow-y: auto !important;
}

.rpp-document h2 { text-align: center !important; color: #0e7490 !important; }
.rpp-section { margin-bottom: 24px !important; break-inside: avoid !important; }
.rpp-section h3 { font-size: 1.15rem !important; font-weight: 700 !important; }

.rpp-table, .rpp-identity {
    width: 100% !important;
    border-collapse: collapse !important;
    font-size: 0.9rem !important;
}

.rpp-table th, .rpp-table td, .rpp-identity th, .rpp-identity td {
    border: 1px solid var(--border-color) !important;
    padding: 8px 12px !important;
    vertical-align: top !important;
    text-align: left !important;
}

.rpp-table thead th {
    background: #f9fafb !important;
    color: var(--text-secondary) !important;
    text-transform: uppercase !important;
    font-size: 0.75rem !important;
}

.rpp-list { padding-left: 20px !important; margin: 4px 0 !important; }
.rpp-header { margin: 6px 0 2px 0 !important; }

.rpp-signature { text-align: right !important; margin-top: 32px !important; }
.rpp-signature p:nth-child(3) { margin-top: 48px !important; }

/* STATES */
.rpp-empty, .rpp-loading {
    text-align: center !important;
    color: var(--text-secondary) !important;
    padding: 48px 16px !important;
}

.rpp-error {
    text-align: center !important;
    color: var(--accent-red) !important;
    background: #fef2f2 !important;
    border: 1px solid #fecaca !important;
    border-radius: var(--radius-md) !important;
    padding: 32px !important;
}
"""

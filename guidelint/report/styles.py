"""Inline CSS for the HTML report.

The stylesheet is written to pass guidelint's own CSS rules, so rendering a
report never produces a page the linter would flag.
"""

CSS = r"""
:root {
  --paper: #fdfdfc;
  --ink: #222;
  --faint: #767676;
  --line: #dcdcdc;
  --error: #c0392b;
  --warning: #b7791f;
  --ok: #2f855a;
  --sans: system-ui, -apple-system, "Segoe UI", sans-serif;
  --code: "JetBrains Mono", "Menlo", monospace;
}

body {
  max-width: 960px;
  margin: 2rem auto;
  padding: 0 1.25rem;
  background: var(--paper);
  color: var(--ink);
  font: 15px/1.5 var(--sans);
}

.masthead {
  display: flex;
  gap: 1rem;
  justify-content: space-between;
  padding-bottom: .5rem;
  border-bottom: 2px solid var(--ink);
  font-size: 13px;
}

.summary {
  margin: 1rem 0 2rem;
  color: var(--faint);
}

.file {
  margin-bottom: 2rem;
}

.file__path {
  margin: 0 0 .25rem;
  font: 600 14px var(--code);
  overflow-wrap: anywhere;
}

.file__meta {
  color: var(--faint);
  font-size: 13px;
}

.file__meta--clean { color: var(--ok); }

.violations {
  width: 100%;
  margin-top: .5rem;
  border-collapse: collapse;
  font: 13px var(--code);
}

.violations th {
  border-bottom: 1px solid var(--ink);
  font-family: var(--sans);
  text-align: left;
}

.violations td {
  padding: .25rem .75rem .25rem 0;
  border-bottom: 1px solid var(--line);
  vertical-align: top;
}

.severity--error { color: var(--error); }

.severity--warning { color: var(--warning); }
"""

"""
Inspection snippets evaluated inside the editor page.

The chat snippet only gathers raw candidates; classification happens in
Python (see rules.py) so it can be tested without a browser.
"""

import json

CONVERSATION_SELECTORS: tuple[str, ...] = (
    ".conversation-content",
    ".agent-response",
    ".assistant-message",
    ".user-query",
    "[data-mode-id] .view-lines",
    ".auxiliary-bar .content",
    ".panel-content",
)

PANEL_SELECTORS: tuple[str, ...] = (
    ".agent-panel",
    ".chat-panel",
    '[class*="agent"]',
    '[class*="chat-view"]',
    ".panel.right",
    ".sidebar-right",
    ".auxiliary-bar",
)

MAX_CANDIDATE_TEXT = 5000


def chat_candidates_snippet(selectors=CONVERSATION_SELECTORS) -> str:
    return """
(function() {
    const selectors = %s;
    const groups = [];
    for (const sel of selectors) {
        const candidates = [];
        for (const el of document.querySelectorAll(sel)) {
            const text = (el.innerText || '').trim();
            if (!text) continue;
            candidates.push({
                text: text.substring(0, %d),
                length: text.length,
                className: typeof el.className === 'string' ? el.className : '',
            });
        }
        groups.push({ selector: sel, candidates: candidates });
    }
    return { groups: groups };
})()
""" % (json.dumps(list(selectors)), MAX_CANDIDATE_TEXT)


def panel_content_snippet(selectors=PANEL_SELECTORS) -> str:
    return """
(function() {
    const selectors = %s;
    for (const sel of selectors) {
        const panel = document.querySelector(sel);
        if (panel) {
            return {
                found: true,
                selector: sel,
                content: (panel.innerText || '').substring(0, 5000),
                html: (panel.innerHTML || '').substring(0, 10000)
            };
        }
    }
    return {
        found: false,
        content: (document.body.innerText || '').substring(0, 5000)
    };
})()
""" % json.dumps(list(selectors))


CONVERSATION_TEXT_SNIPPET = """
(function() {
    const rightPanel = document.querySelector('.split-view-container .split-view-view:last-child')
        || document.querySelector('.editor-group-container + *')
        || document.querySelector('.auxiliary-bar-content')
        || document.querySelector('[id*="workbench.panel"]');
    if (rightPanel) {
        const text = rightPanel.innerText || '';
        const lines = text.split('\\n').filter(l => l.trim().length > 20);
        return {
            found: true,
            source: 'panel',
            raw_text: text.substring(0, 8000),
            lines: lines.slice(0, 50)
        };
    }
    const markdown = document.querySelectorAll('.rendered-markdown, .markdown-body, [class*="markdown"]');
    if (markdown.length > 0) {
        const texts = Array.from(markdown).map(el => el.innerText || '').filter(t => t.length > 30);
        return { found: true, source: 'markdown', lines: texts.slice(0, 20) };
    }
    return { found: false };
})()
"""

# Raw tab labels and file URIs; path parsing happens in workspace.py.
WORKSPACE_SOURCES_SNIPPET = """
(function() {
    const labels = [];
    for (const tab of document.querySelectorAll('[role="tab"], [class*="tab-label"], .tab')) {
        labels.push(tab.getAttribute('aria-label') || '');
        labels.push(tab.getAttribute('title') || '');
        if (labels.length >= 500) break;
    }
    const uris = [];
    for (const el of document.querySelectorAll('[data-uri]')) {
        uris.push(el.getAttribute('data-uri') || '');
        if (uris.length >= 500) break;
    }
    return { labels: labels, uris: uris };
})()
"""

"""Fixed stylesheet served at /styles.css."""


STYLESHEET = """\
* {
    margin: 0;
    padding: 0;
    box-sizing: border-box;
}

body {
    font-family: 'Helvetica Neue', Arial, sans-serif;
    background: #ffffff;
    color: #000000;
    line-height: 1.6;
}

header {
    background: #000000;
    color: #ffffff;
    padding: 1.5rem 2rem;
    display: flex;
    justify-content: space-between;
    align-items: center;
    border-bottom: 4px solid #ff0000;
}

header h1 {
    font-size: 1.8rem;
    font-weight: 700;
    letter-spacing: -1px;
}

header h1 a {
    color: #ffffff;
    text-decoration: none;
}

nav {
    display: flex;
    gap: 1rem;
    align-items: center;
}

.search-form {
    display: flex;
    gap: 0.5rem;
}

.search-input {
    padding: 0.5rem 1rem;
    border: 2px solid #ffffff;
    background: #000000;
    color: #ffffff;
    font-size: 1rem;
}

main {
    max-width: 900px;
    margin: 2rem auto;
    padding: 0 2rem;
}

article {
    background: #ffffff;
    border: 2px solid #000000;
    padding: 2rem;
}

.article-header {
    display: flex;
    justify-content: space-between;
    align-items: center;
    margin-bottom: 2rem;
    padding-bottom: 1rem;
    border-bottom: 2px solid #000000;
}

.article-header h2 {
    font-size: 2rem;
    font-weight: 700;
}

.article-actions {
    display: flex;
    gap: 0.5rem;
}

.article-content {
    font-size: 1.1rem;
}

.article-content h2 {
    font-size: 1.5rem;
    margin: 1.5rem 0 1rem 0;
    font-weight: 700;
}

.article-content p {
    margin-bottom: 1rem;
}

.article-content ul {
    margin-left: 2rem;
    margin-bottom: 1rem;
}

.wiki-link {
    color: #0000ff;
    text-decoration: none;
    font-weight: 500;
    border-bottom: 1px solid #0000ff;
}

.wiki-link:hover {
    background: #ffff00;
    border-bottom: 2px solid #0000ff;
}

.btn, .primary-btn {
    padding: 0.5rem 1.5rem;
    text-decoration: none;
    font-weight: 600;
    display: inline-block;
    cursor: pointer;
    border: 2px solid #000000;
    background: #ffffff;
    color: #000000;
    font-size: 1rem;
}

.btn:hover {
    background: #ffff00;
}

.primary-btn {
    background: #ff0000;
    color: #ffffff;
    border-color: #ff0000;
}

.primary-btn:hover {
    background: #cc0000;
}

.edit-form {
    margin-bottom: 2rem;
}

.edit-textarea {
    width: 100%;
    padding: 1rem;
    font-family: 'Courier New', monospace;
    font-size: 1rem;
    border: 2px solid #000000;
    resize: vertical;
}

.form-actions {
    margin-top: 1rem;
    display: flex;
    gap: 0.5rem;
}

.help-box {
    background: #f5f5f5;
    border: 2px solid #000000;
    padding: 1rem;
    margin-top: 2rem;
}

.help-box h3 {
    margin-bottom: 0.5rem;
    font-size: 1.2rem;
}

.help-box ul {
    list-style-position: inside;
}

.not-found {
    text-align: center;
    padding: 3rem 0;
}

.not-found h2 {
    font-size: 2rem;
    margin-bottom: 1rem;
}

.not-found p {
    margin-bottom: 2rem;
    font-size: 1.1rem;
}

.history-list {
    margin: 2rem 0;
}

.history-item {
    padding: 1rem;
    border: 2px solid #000000;
    margin-bottom: 1rem;
    background: #f5f5f5;
}

.history-number {
    font-weight: 700;
    font-size: 1.2rem;
    margin-bottom: 0.5rem;
}

.history-date {
    color: #666666;
    margin-bottom: 0.5rem;
}

.history-preview {
    font-family: 'Courier New', monospace;
    font-size: 0.9rem;
}

.search-results {
    margin: 2rem 0;
}

.search-result {
    padding: 1rem;
    border: 2px solid #000000;
    margin-bottom: 1rem;
    background: #ffffff;
}

.search-result a {
    font-size: 1.2rem;
    color: #0000ff;
    text-decoration: none;
    font-weight: 600;
}

.search-result a:hover {
    text-decoration: underline;
}

footer {
    text-align: center;
    padding: 2rem;
    background: #000000;
    color: #ffffff;
    margin-top: 4rem;
    border-top: 4px solid #ff0000;
}
"""

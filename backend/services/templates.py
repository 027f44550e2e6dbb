"""
Starter files for new projects.

Each template is an ordered list of files and folders. Folders come before
the files inside them so inserts never reference a missing parent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "static"


@dataclass(frozen=True)
class TemplateFile:
    name: str
    path: str
    content: str = ""
    is_folder: bool = False
    parent_path: str | None = None


def _folder(path: str) -> TemplateFile:
    return TemplateFile(name=path.rsplit("/", 1)[-1], path=path, is_folder=True)


def _file(path: str, content: str) -> TemplateFile:
    parent, _, name = path.rpartition("/")
    return TemplateFile(name=name, path=path, content=content, parent_path=parent or None)


NEXTJS_INDEX = """export default function Home() {
  return (
    <div style={{ fontFamily: 'system-ui, sans-serif', padding: '2rem' }}>
      <h1>Welcome to Next.js!</h1>
      <p>Get started by editing <code>pages/index.js</code></p>
      <div style={{ marginTop: '2rem' }}>
        <a
          href="https://nextjs.org/docs"
          target="_blank"
          rel="noopener noreferrer"
          style={{ color: '#0070f3' }}
        >
          Documentation
        </a>
      </div>
    </div>
  );
}"""

NEXTJS_GLOBALS = """* {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}

html,
body {
  font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
  background: #fafafa;
  color: #333;
}

a {
  color: inherit;
  text-decoration: none;
}"""

NEXTJS_PACKAGE = """{
  "name": "my-nextjs-app",
  "version": "1.0.0",
  "scripts": {
    "dev": "next dev",
    "build": "next build",
    "start": "next start"
  },
  "dependencies": {
    "next": "^14.0.0",
    "react": "^18.2.0",
    "react-dom": "^18.2.0"
  }
}"""

VUE_APP = """<template>
  <div class="app">
    <h1>{{ message }}</h1>
    <p>Edit <code>src/App.vue</code> to get started</p>
    <button @click="count++">Count: {{ count }}</button>
  </div>
</template>

<script setup>
import { ref } from 'vue'

const message = ref('Welcome to Vue + Vite!')
const count = ref(0)
</script>

<style scoped>
.app {
  font-family: system-ui, sans-serif;
  text-align: center;
  padding: 2rem;
}

button {
  margin-top: 1rem;
  padding: 0.5rem 1rem;
  font-size: 1rem;
  cursor: pointer;
  border: 1px solid #42b883;
  background: #42b883;
  color: white;
  border-radius: 4px;
}

button:hover {
  background: #3aa876;
}
</style>"""

VUE_MAIN = """import { createApp } from 'vue'
import App from './App.vue'

createApp(App).mount('#app')"""

VUE_INDEX = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <title>Vite + Vue App</title>
  </head>
  <body>
    <div id="app"></div>
    <script type="module" src="/src/main.js"></script>
  </body>
</html>"""

VUE_PACKAGE = """{
  "name": "my-vite-vue-app",
  "version": "1.0.0",
  "scripts": {
    "dev": "vite",
    "build": "vite build",
    "preview": "vite preview"
  },
  "dependencies": {
    "vue": "^3.4.0"
  },
  "devDependencies": {
    "@vitejs/plugin-vue": "^5.0.0",
    "vite": "^5.0.0"
  }
}"""

VUE_CONFIG = """import { defineConfig } from 'vite'
import vue from '@vitejs/plugin-vue'

export default defineConfig({
  plugins: [vue()]
})"""

STATIC_INDEX = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>My Website</title>
  <link rel="stylesheet" href="styles.css">
</head>
<body>
  <header>
    <nav>
      <h1>My Website</h1>
    </nav>
  </header>

  <main>
    <section class="hero">
      <h2>Welcome!</h2>
      <p>This is a simple static website template.</p>
      <button id="cta-button">Get Started</button>
    </section>

    <section class="features">
      <div class="feature">
        <h3>Fast</h3>
        <p>Lightning fast performance</p>
      </div>
      <div class="feature">
        <h3>Simple</h3>
        <p>Easy to customize</p>
      </div>
      <div class="feature">
        <h3>Modern</h3>
        <p>Built with modern standards</p>
      </div>
    </section>
  </main>

  <footer>
    <p>Made with ProDev Studio</p>
  </footer>

  <script src="script.js"></script>
</body>
</html>"""

STATIC_STYLES = """* {
  box-sizing: border-box;
  margin: 0;
  padding: 0;
}

body {
  font-family: system-ui, -apple-system, sans-serif;
  line-height: 1.6;
  color: #333;
  background: #fafafa;
}

header {
  background: #2563eb;
  color: white;
  padding: 1rem 2rem;
}

header h1 {
  font-size: 1.5rem;
}

main {
  max-width: 1200px;
  margin: 0 auto;
  padding: 2rem;
}

.hero {
  text-align: center;
  padding: 4rem 0;
}

.hero h2 {
  font-size: 3rem;
  margin-bottom: 1rem;
  color: #1e40af;
}

.hero p {
  font-size: 1.25rem;
  color: #64748b;
  margin-bottom: 2rem;
}

.hero button {
  background: #2563eb;
  color: white;
  border: none;
  padding: 0.75rem 2rem;
  font-size: 1rem;
  border-radius: 8px;
  cursor: pointer;
  transition: background 0.2s;
}

.hero button:hover {
  background: #1d4ed8;
}

.features {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
  gap: 2rem;
  padding: 2rem 0;
}

.feature {
  background: white;
  padding: 2rem;
  border-radius: 12px;
  box-shadow: 0 1px 3px rgba(0,0,0,0.1);
  text-align: center;
}

.feature h3 {
  color: #2563eb;
  margin-bottom: 0.5rem;
}

footer {
  text-align: center;
  padding: 2rem;
  color: #64748b;
  border-top: 1px solid #e2e8f0;
}"""

STATIC_SCRIPT = """// Main JavaScript file
document.addEventListener('DOMContentLoaded', function() {
  console.log('Website loaded!');

  const ctaButton = document.getElementById('cta-button');
  if (ctaButton) {
    ctaButton.addEventListener('click', function() {
      alert('Thanks for clicking! Start building your website.');
    });
  }
});"""


TEMPLATES: dict[str, tuple[TemplateFile, ...]] = {
    "nextjs": (
        _folder("pages"),
        _file("pages/index.js", NEXTJS_INDEX),
        _folder("styles"),
        _file("styles/globals.css", NEXTJS_GLOBALS),
        _file("package.json", NEXTJS_PACKAGE),
    ),
    "vite-vue": (
        _folder("src"),
        _file("src/App.vue", VUE_APP),
        _file("src/main.js", VUE_MAIN),
        _file("index.html", VUE_INDEX),
        _file("package.json", VUE_PACKAGE),
        _file("vite.config.js", VUE_CONFIG),
    ),
    "static": (
        _file("index.html", STATIC_INDEX),
        _file("styles.css", STATIC_STYLES),
        _file("script.js", STATIC_SCRIPT),
    ),
}


def template_files(template: str) -> list[TemplateFile]:
    """Starter files for a template. Unknown names fall back to the static site."""
    files = TEMPLATES.get(template)
    if files is None:
        logger.info("Unknown template %r, using %s", template, DEFAULT_TEMPLATE)
        files = TEMPLATES[DEFAULT_TEMPLATE]
    return list(files)
